"""Derivation registry: every derived entity is a function registered via decorator.

Usage:
    @derived(id="D2.01", layer=Layer.GEOMETRY, inputs={"grouping_mode"}, dependencies=["D1.03"])
    def centroids(ctx: ViewContext) -> None:
        ctx.centroids = compute_centroids(ctx.scope, ctx.params.grouping_mode)

A derivation reruns only when one of its declared ``inputs`` (ViewParams
field names) changed or one of its ``dependencies`` reran.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from clusterscope.engine.context import ViewContext

logger = logging.getLogger(__name__)


class Layer(enum.IntEnum):
    INPUT = 0
    SCOPE = 1
    GEOMETRY = 2
    SUMMARY = 3


@dataclass
class DerivationSpec:
    id: str
    layer: Layer
    fn: Callable[["ViewContext"], None]
    inputs: set[str] = field(default_factory=set)
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class DerivationRegistry:
    """Singleton registry of all derivations."""

    def __init__(self) -> None:
        self._derivations: dict[str, DerivationSpec] = {}

    def register(self, spec: DerivationSpec) -> None:
        if spec.id in self._derivations:
            raise ValueError(f"Duplicate derivation ID: {spec.id}")
        self._derivations[spec.id] = spec
        logger.debug("Registered derivation %s (%s)", spec.id, spec.layer.name)

    def get(self, derivation_id: str) -> DerivationSpec:
        return self._derivations[derivation_id]

    def get_layer(self, layer: Layer) -> list[DerivationSpec]:
        specs = [s for s in self._derivations.values() if s.layer == layer]
        return sorted(specs, key=lambda s: s.id)

    def all(self) -> list[DerivationSpec]:
        return sorted(self._derivations.values(), key=lambda s: (s.layer, s.id))

    def dirty(self, changed_inputs: set[str] | None) -> set[str]:
        """IDs to recompute: direct readers of a changed input plus all dependents.

        ``None`` means everything is dirty (first run).
        """
        if changed_inputs is None:
            return set(self._derivations)

        dirty = {sid for sid, s in self._derivations.items() if s.inputs & changed_inputs}
        grew = True
        while grew:
            grew = False
            for sid, spec in self._derivations.items():
                if sid not in dirty and any(d in dirty for d in spec.dependencies):
                    dirty.add(sid)
                    grew = True
        return dirty

    def resolve_order(self, requested_ids: set[str] | None = None) -> list[DerivationSpec]:
        """Topological sort of the requested derivations (all when None)."""
        pool = self._derivations
        if requested_ids is not None:
            pool = {k: v for k, v in pool.items() if k in requested_ids}

        # Kahn's algorithm
        in_degree: dict[str, int] = {did: 0 for did in pool}
        for did, spec in pool.items():
            for dep in spec.dependencies:
                if dep in pool:
                    in_degree[did] += 1

        queue = sorted([did for did, d in in_degree.items() if d == 0])
        ordered: list[DerivationSpec] = []

        while queue:
            did = queue.pop(0)
            ordered.append(pool[did])
            for other_id, other_spec in pool.items():
                if did in other_spec.dependencies:
                    in_degree[other_id] -= 1
                    if in_degree[other_id] == 0:
                        queue.append(other_id)
                        queue.sort()

        if len(ordered) != len(pool):
            missing = set(pool.keys()) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {missing}")

        return ordered

    @property
    def count(self) -> int:
        return len(self._derivations)


# Module-level singleton
_registry = DerivationRegistry()


def get_registry() -> DerivationRegistry:
    return _registry


def derived(
    *,
    id: str,
    layer: Layer,
    inputs: set[str] | None = None,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a derivation function."""

    def decorator(fn: Callable[["ViewContext"], None]):
        spec = DerivationSpec(
            id=id,
            layer=layer,
            fn=fn,
            inputs=inputs or set(),
            dependencies=dependencies or [],
            description=description,
        )
        _registry.register(spec)
        return fn

    return decorator
