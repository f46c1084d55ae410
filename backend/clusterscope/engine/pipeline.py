"""Pipeline orchestrator: reruns only the derivations whose inputs changed."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time

from clusterscope.engine.context import ViewContext
from clusterscope.engine.registry import DerivationRegistry, Layer, get_registry

logger = logging.getLogger(__name__)

_LAYER_PACKAGES = ("layer0", "layer1", "layer2", "layer3")


def load_derivations() -> None:
    """Import all derivation modules so @derived decorators fire."""
    for layer_name in _LAYER_PACKAGES:
        package_name = f"clusterscope.engine.{layer_name}"
        package = importlib.import_module(package_name)
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package_name}.{module_name}")


class Pipeline:
    """Orchestrates the derivation graph."""

    def __init__(self, registry: DerivationRegistry | None = None) -> None:
        self.registry = registry or get_registry()

    def run(self, ctx: ViewContext, changed_inputs: set[str] | None = None) -> ViewContext:
        """Recompute what ``changed_inputs`` invalidates (everything when None)."""
        start = time.perf_counter()

        dirty = self.registry.dirty(changed_inputs)
        ordered = self.registry.resolve_order(dirty)

        logger.debug(
            "Pipeline: %d/%d derivations dirty (changed=%s)",
            len(ordered),
            self.registry.count,
            sorted(changed_inputs) if changed_inputs is not None else "all",
        )

        for spec in ordered:
            t0 = time.perf_counter()
            ctx.errors.pop(spec.id, None)
            try:
                spec.fn(ctx)
                ctx.completed_derivations.add(spec.id)
                elapsed = (time.perf_counter() - t0) * 1000
                logger.debug("  %s completed in %.1fms", spec.id, elapsed)
            except Exception as e:
                ctx.completed_derivations.discard(spec.id)
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d derivations in %.0fms (%d errors)",
            len(ordered),
            total,
            len(ctx.errors),
        )
        return ctx

    def run_layer(self, ctx: ViewContext, layer: Layer) -> ViewContext:
        """Run only derivations in a specific layer."""
        for spec in self.registry.get_layer(layer):
            try:
                spec.fn(ctx)
                ctx.completed_derivations.add(spec.id)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)
        return ctx


def create_pipeline() -> Pipeline:
    """Factory: a pipeline over the global registry with every derivation loaded."""
    load_derivations()
    return Pipeline()
