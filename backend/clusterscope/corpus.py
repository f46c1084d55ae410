"""Static record corpus: dataset files plus the survey code table.

Files are read once; normalized records are cached per dataset so sessions
share them.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Sequence

from clusterscope.analytics.codes import CodeTable
from clusterscope.analytics.normalizer import MODEL_FIELD_ALIASES, NormalizeResult, normalize_records

logger = logging.getLogger(__name__)


class CorpusError(LookupError):
    """Unknown dataset or unreadable corpus file."""


class Corpus:
    def __init__(
        self,
        datasets: Mapping[str, Sequence[Mapping[str, Any]]],
        code_table: CodeTable | None = None,
    ) -> None:
        if not datasets:
            raise CorpusError("Corpus has no datasets")
        self._rows = {name: list(rows) for name, rows in datasets.items()}
        self.code_table = code_table or CodeTable()
        self._normalized: dict[tuple[str, tuple[str, ...]], NormalizeResult] = {}

    @property
    def names(self) -> list[str]:
        return list(self._rows)

    @property
    def default_dataset(self) -> str:
        return self.names[0]

    def rows(self, name: str) -> list[Mapping[str, Any]]:
        if name not in self._rows:
            raise CorpusError(f"Unknown dataset: {name!r}")
        return self._rows[name]

    def normalized(self, name: str, aliases: Sequence[str] = MODEL_FIELD_ALIASES) -> NormalizeResult:
        key = (name, tuple(aliases))
        if key not in self._normalized:
            self._normalized[key] = normalize_records(self.rows(name), aliases)
        return self._normalized[key]


def _read_json(path: Path) -> Any:
    try:
        with path.open(encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError:
        raise CorpusError(f"Corpus file not found: {path}") from None
    except json.JSONDecodeError as e:
        raise CorpusError(f"Corpus file is not valid JSON: {path} ({e})") from None


def load_corpus(data_dir: str | Path, datasets: Mapping[str, str], code_table_file: str | None) -> Corpus:
    """Read every dataset file and the code table from ``data_dir``."""
    base = Path(data_dir)
    loaded: dict[str, list[Mapping[str, Any]]] = {}
    for name, filename in datasets.items():
        rows = _read_json(base / filename)
        if not isinstance(rows, list):
            raise CorpusError(f"Dataset {name!r} must be a JSON array of records")
        loaded[name] = rows
        logger.info("Loaded dataset %s: %d rows from %s", name, len(rows), filename)

    code_table = CodeTable()
    if code_table_file:
        code_rows = _read_json(base / code_table_file)
        if not isinstance(code_rows, list):
            raise CorpusError("Code table must be a JSON array of {NAME, START, LABEL} rows")
        code_table = CodeTable.from_rows(code_rows)
        logger.info("Loaded code table: %d fields", len(code_table))

    return Corpus(loaded, code_table)
