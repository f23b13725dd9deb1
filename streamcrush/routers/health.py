import time
from fastapi import APIRouter


router = APIRouter()


@router.get("/health", tags=["Health"], summary="Проверка доступности сервиса")
async def health():
    return {"status": "ok", "time": time.time()}


@router.get("/", tags=["Health"], summary="Корень сервиса")
async def root():
    return {
        "service": "Stream Crush Service",
        "version": "0.1.0",
        "endpoints": [
            "/crush/start",
            "/crush/upload",
            "/crush/result/{job_id}",
            "/crush/stream/{job_id}",
            "/sources",
            "/health",
        ],
    }
