"""Code Resolver: raw survey codes → human labels.

Lookup order is fixed: exact raw value, string form, numeric form. A value
with no match is already a label and is returned as its string form. Every
consumer (categorical summaries, geo, agreement) goes through ``resolve_code``.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from clusterscope.utils.coerce import string_form, to_number

logger = logging.getLogger(__name__)


class CodeTableError(ValueError):
    """Malformed code table configuration."""


def resolve_code(raw: Any, codes: Mapping[Any, str] | None) -> str:
    if codes:
        # True == 1 under hashing, so bools skip the exact lookup
        if not isinstance(raw, bool):
            try:
                if raw in codes:
                    return codes[raw]
            except TypeError:
                # unhashable raw value
                pass
        text = string_form(raw)
        if text in codes:
            return codes[text]
        num = to_number(raw)
        if num is not None and num in codes:
            return codes[num]
    return string_form(raw)


class CodeTable:
    """Field name → (raw code → label)."""

    def __init__(self, fields: Mapping[str, Mapping[Any, str]] | None = None) -> None:
        self._fields: dict[str, dict[Any, str]] = {}
        for name, mapping in (fields or {}).items():
            key = str(name).strip() if name is not None else ""
            if not key:
                raise CodeTableError("Code table contains a blank field name")
            self._fields[key] = dict(mapping)

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, Any]]) -> CodeTable:
        """Build from ``{NAME, START, LABEL}`` rows.

        Each code is indexed under its native value, string form and numeric
        form so exports that mix ``1`` and ``"1"`` resolve the same way.
        """
        by_field: dict[str, dict[Any, str]] = {}
        for i, row in enumerate(rows):
            field = str(row.get("NAME") or "").strip()
            if not field:
                raise CodeTableError(f"Code table row {i} has a blank NAME")
            start = row.get("START")
            label = str(row.get("LABEL") if row.get("LABEL") is not None else "").strip()
            mapping = by_field.setdefault(field, {})
            try:
                mapping[start] = label
            except TypeError:
                raise CodeTableError(f"Code table row {i} has an unhashable START") from None
            mapping[string_form(start)] = label
            num = to_number(start)
            if num is not None:
                mapping[num] = label

        table = cls()
        table._fields = by_field
        logger.debug("Loaded code table: %d fields", len(by_field))
        return table

    @property
    def fields(self) -> list[str]:
        return list(self._fields)

    def has_field(self, field: str) -> bool:
        return field in self._fields

    def codes_for(self, field: str) -> Mapping[Any, str] | None:
        return self._fields.get(field)

    def resolve(self, field: str, raw: Any) -> str:
        return resolve_code(raw, self._fields.get(field))

    def __len__(self) -> int:
        return len(self._fields)
