from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from ..deps import get_backend_client
from ...core.config import settings
from ...services.backend_client import BackendClient, BackendError
from ...services.dashboard import DashboardSummary, build_summary

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=DashboardSummary)
async def dashboard_summary(
    top_n: int | None = Query(default=None, ge=0),
    recent: int | None = Query(default=None, ge=0),
    client: BackendClient = Depends(get_backend_client),
):
    """
    Headline metrics for the dashboard page.

    Returns total documents, success rate (share of documents with high
    dashboard confidence), total amount, confidence overview counts, sender
    distribution (top N plus "Others") and the most recent documents.
    """
    try:
        documents = await client.list_documents()
    except BackendError as e:
        raise HTTPException(status_code=502, detail=e.message)

    summary = build_summary(
        documents,
        top_n=top_n if top_n is not None else settings.summary_top_n,
        recent_limit=recent if recent is not None else settings.recent_documents_limit,
        currency=settings.default_currency,
    )
    logger.info(
        "Dashboard summary built",
        total_documents=summary.total_documents,
        success_rate=summary.success_rate,
    )
    return summary
