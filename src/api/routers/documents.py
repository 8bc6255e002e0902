from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from loguru import logger
from ..deps import get_backend_client
from ...core.config import settings
from ...models.search import SearchPredicate, SearchState, SortDirection
from ...services.backend_client import BackendClient, BackendError
from ...services.document_views import DocumentDetail, SearchResultRow, document_detail, search_row
from ...services.search import build_query_params, filter_documents, sort_for_state

router = APIRouter(prefix="/documents", tags=["documents"])


class SearchResponse(BaseModel):
    total: int
    sort_field: str
    sort_direction: SortDirection
    params: dict[str, str]
    results: list[SearchResultRow]


class DocumentDetailResponse(DocumentDetail):
    file_url: str | None = None


def _backend_failure(e: BackendError) -> HTTPException:
    if e.status_code == 404:
        return HTTPException(status_code=404, detail=e.message)
    return HTTPException(status_code=502, detail=e.message)


@router.get("/search", response_model=SearchResponse)
async def search(
    query: str | None = None,
    field: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
    amount_min: str | None = None,
    amount_max: str | None = None,
    sort_field: str = "invoice_date",
    sort_direction: SortDirection = SortDirection.DESC,
    local: bool = False,
    client: BackendClient = Depends(get_backend_client),
):
    """
    Search results table.

    Filters are sent to the backend's search endpoint (empty ones omitted);
    with no filters the full document list is used. `local=true` fetches
    the full list and filters it here instead. Results are then sorted by
    `sort_field`: invoice_date/due_date as dates, total_amount as a number,
    anything else as text. Documents without the sort field keep their
    relative order.
    """
    state = SearchState(
        predicate=SearchPredicate(
            text=query,
            field=field,
            date_from=date_from,
            date_to=date_to,
            amount_min=amount_min,
            amount_max=amount_max,
        ),
        sort_field=sort_field,
        sort_direction=sort_direction,
    )

    try:
        if local:
            documents = filter_documents(await client.list_documents(), state.predicate)
        elif state.predicate.is_empty():
            documents = await client.list_documents()
        else:
            documents = await client.search_documents(state.predicate)
    except BackendError as e:
        raise _backend_failure(e)

    ordered = sort_for_state(documents, state)
    logger.info(
        "Search results sorted",
        count=len(ordered),
        sort_field=state.sort_field,
        sort_direction=state.sort_direction.value,
        local=local,
    )
    return SearchResponse(
        total=len(ordered),
        sort_field=state.sort_field,
        sort_direction=state.sort_direction,
        params=build_query_params(state.predicate),
        results=[search_row(document, settings.default_currency) for document in ordered],
    )


@router.get("/{document_id}", response_model=DocumentDetailResponse)
async def get_document(document_id: str, client: BackendClient = Depends(get_backend_client)):
    """Detail view of one document: every field with its badges, line items and raw text."""
    try:
        document = await client.get_document(document_id)
    except BackendError as e:
        raise _backend_failure(e)

    detail = document_detail(document, settings.default_currency)
    return DocumentDetailResponse(
        **detail.model_dump(),
        file_url=client.file_url(document.filename) if document.filename else None,
    )
