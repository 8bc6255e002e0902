import httpx
from typing import Any
from urllib.parse import quote
from loguru import logger
from pydantic import ValidationError
from ..core.config import settings
from ..models.document import Document
from ..models.search import SearchPredicate
from .search import build_query_params

# Thin async client for the extraction backend. The backend owns extraction,
# storage and search; this service only reads from it.


class BackendError(Exception):
    """A backend call failed; `status_code` is None for transport errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BackendClient:
    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = (base_url or settings.backend_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.backend_timeout_seconds

    async def _get_json(self, path: str, default_error: str, params: dict | None = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                r = await client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error("Backend request failed", url=url, error=str(e))
            raise BackendError(f"{default_error}: {e}") from e

        if r.is_error:
            try:
                body = r.json()
            except ValueError:
                body = None
            message = default_error
            if isinstance(body, dict) and body.get("error"):
                message = str(body["error"])
            logger.warning("Backend returned an error", url=url, status=r.status_code, error=message)
            raise BackendError(message, r.status_code)

        try:
            return r.json()
        except ValueError as e:
            raise BackendError(f"{default_error}: invalid JSON response", r.status_code) from e

    @staticmethod
    def _to_documents(payload: Any, default_error: str) -> list[Document]:
        if not isinstance(payload, list):
            raise BackendError(f"{default_error}: expected a list of documents")

        documents = []
        for item in payload:
            if not isinstance(item, dict):
                logger.warning("Skipping non-object document payload")
                continue
            try:
                documents.append(Document.from_payload(item))
            except ValidationError as e:
                logger.warning("Skipping malformed document", document_id=item.get("id"), errors=e.error_count())
        return documents

    async def list_documents(self) -> list[Document]:
        error = "Failed to fetch documents"
        documents = self._to_documents(await self._get_json("/documents", error), error)
        logger.info("Fetched documents", count=len(documents))
        return documents

    async def get_document(self, document_id: str) -> Document:
        error = "Failed to fetch document"
        payload = await self._get_json(f"/documents/{quote(document_id, safe='')}", error)
        if not isinstance(payload, dict):
            raise BackendError(f"{error}: expected a document object")
        try:
            return Document.from_payload(payload)
        except ValidationError as e:
            raise BackendError(f"{error}: malformed document") from e

    async def search_documents(self, predicate: SearchPredicate) -> list[Document]:
        error = "Failed to search documents"
        params = build_query_params(predicate)
        documents = self._to_documents(await self._get_json("/search", error, params=params), error)
        logger.info("Backend search completed", params=params, count=len(documents))
        return documents

    async def debug_info(self) -> Any:
        return await self._get_json("/debug", "Failed to get debug info")

    def file_url(self, filename: str) -> str:
        return f"{self.base_url}/files/{quote(filename)}"
