from fastapi import APIRouter
from netbill.core.config import settings

router = APIRouter()

@router.get("/health")
async def health():
    return {"status": "ok", "service": settings.PROJECT_NAME, "backend": settings.SHEETS_BACKEND}
