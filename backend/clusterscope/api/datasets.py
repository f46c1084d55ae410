"""GET /api/datasets: corpus overview for populating the controls."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from clusterscope.analytics.scope import available_clusters, available_models
from clusterscope.corpus import Corpus
from clusterscope.dependencies import get_corpus
from clusterscope.models.responses import DatasetInfo, DatasetsResponse

router = APIRouter()


@router.get("/datasets", response_model=DatasetsResponse)
async def list_datasets(corpus: Corpus = Depends(get_corpus)) -> DatasetsResponse:
    infos = []
    for name in corpus.names:
        result = corpus.normalized(name)
        infos.append(
            DatasetInfo(
                name=name,
                record_count=len(result.records),
                dropped_count=result.dropped,
                models=available_models(result.records),
                clusters=available_clusters(result.records),
            )
        )
    return DatasetsResponse(datasets=infos, code_table_fields=corpus.code_table.fields)
