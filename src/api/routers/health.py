from fastapi import APIRouter, Depends, HTTPException
from ..deps import get_backend_client
from ...core.config import settings
from ...services.backend_client import BackendClient, BackendError

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    return {"status": "ok", "app": settings.app_name}


@router.get("/backend/status")
async def backend_status(client: BackendClient = Depends(get_backend_client)):
    """Pass through the extraction backend's debug/status report."""
    try:
        return await client.debug_info()
    except BackendError as e:
        raise HTTPException(status_code=502, detail=e.message)
