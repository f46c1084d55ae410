"""ClusterScope reactive view engine."""

from clusterscope.engine.registry import derived, Layer, get_registry
from clusterscope.engine.context import ViewContext, ViewParams
from clusterscope.engine.pipeline import Pipeline
from clusterscope.engine.view import ViewEngine

__all__ = [
    "derived",
    "Layer",
    "get_registry",
    "ViewContext",
    "ViewParams",
    "Pipeline",
    "ViewEngine",
]
