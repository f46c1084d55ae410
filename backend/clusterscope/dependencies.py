"""FastAPI dependency injection."""

from __future__ import annotations

from functools import lru_cache

from clusterscope.config import Settings, settings
from clusterscope.corpus import Corpus, load_corpus


def get_settings() -> Settings:
    return settings


@lru_cache(maxsize=1)
def _cached_corpus() -> Corpus:
    return load_corpus(settings.data_dir, settings.datasets, settings.code_table_file)


def get_corpus() -> Corpus:
    return _cached_corpus()
