from fastapi import APIRouter
from ..config import settings

router = APIRouter(tags=["health"])

@router.get("/health")
def health():
    return {
        "status": "ok",
        "mw_server": str(settings.mw_server),
        "namespaces": settings.sitemap_namespace_ids,
    }
