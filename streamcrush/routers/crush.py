import asyncio
import time
import uuid
from typing import Callable

from fastapi import APIRouter, Body, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse, StreamingResponse

from streamcrush.core.settings import load_settings
from streamcrush.core.state import CRUSH_JOBS, CRUSH_JOBS_LOCK
from streamcrush.domain.schemas import CrushConfig, CrushResult, CrushStartResponse
from streamcrush.parsers.remote import fetch_bytes
from streamcrush.services.crusher import crush as run_crush, stream_bytes_required
from streamcrush.services.scoring import ScoringConfig
from streamcrush.services.source import SOURCE_KINDS, StreamSource, build_source
from streamcrush.utils.sse import sse_format


router = APIRouter()


def _start_job(source_name: str, make_source: Callable[[], StreamSource]) -> str:
    settings = load_settings()
    job_id = str(uuid.uuid4())
    with CRUSH_JOBS_LOCK:
        CRUSH_JOBS[job_id] = {
            "status": "running",
            "source": source_name,
            "started_at": time.time(),
            "stages": [],
        }

    def job():
        def emit(name: str, evt: dict):
            with CRUSH_JOBS_LOCK:
                CRUSH_JOBS[job_id]["stages"].append(evt)

        return run_crush(
            make_source(),
            emit=emit,
            config=ScoringConfig(distribution_ideal=settings.distribution_ideal),
            workers=settings.crush_workers,
        )

    async def run():
        try:
            result = await asyncio.to_thread(job)
            result.pop("stages", None)
            with CRUSH_JOBS_LOCK:
                CRUSH_JOBS[job_id].update(result)
        except Exception as e:
            with CRUSH_JOBS_LOCK:
                CRUSH_JOBS[job_id].update({"status": "error", "error": str(e), "finished_at": time.time()})

    asyncio.create_task(run())
    return job_id


@router.post(
    "/crush/start",
    response_model=CrushStartResponse,
    tags=["Crush"],
    summary="Запуск оценки встроенного генератора",
    description=(
        "Строит поток из встроенного генератора (или байт по URL), прогоняет исходный поток "
        "и 12 преобразований, суммирует оценки. Этапы доступны через SSE."
    ),
)
async def start_crush(
    cfg: CrushConfig = Body(
        ...,
        examples=[
            {"source": "pcg64", "seed": 42},
            {"source": "lcg", "seed": 1},
        ],
    )
):
    if cfg.source not in SOURCE_KINDS or cfg.source == "bytes":
        raise HTTPException(400, f"unknown source: {cfg.source}")
    if cfg.source == "url":
        if not cfg.url:
            raise HTTPException(400, "url source requires url")
        settings = load_settings()

        def make_source() -> StreamSource:
            data = fetch_bytes(cfg.url, timeout=settings.remote_timeout, limit=settings.max_upload_bytes)
            return build_source("url", data=data)
    else:
        def make_source() -> StreamSource:
            return build_source(cfg.source, seed=cfg.seed, value=cfg.value)

    return CrushStartResponse(job_id=_start_job(cfg.source, make_source))


@router.post(
    "/crush/upload",
    response_model=CrushStartResponse,
    tags=["Crush"],
    summary="Оценка загруженного потока байт",
    description="Файл читается как последовательность 64-битных чисел (big-endian).",
)
async def crush_upload(file: UploadFile = File(...)):
    content = await file.read()
    if not content:
        raise HTTPException(400, "Uploaded file is empty")
    limit = load_settings().max_upload_bytes
    if len(content) > limit:
        raise HTTPException(400, f"Uploaded file exceeds {limit} bytes")
    needed = stream_bytes_required()
    if len(content) < needed:
        raise HTTPException(400, f"Uploaded file is too short: {len(content)} bytes, need {needed}")
    source = build_source("bytes", data=content)
    return CrushStartResponse(job_id=_start_job("bytes", lambda: source))


@router.get(
    "/crush/result/{job_id}",
    response_model=CrushResult,
    tags=["Crush"],
    summary="Результат оценки",
)
async def crush_result(job_id: str):
    job = CRUSH_JOBS.get(job_id)
    if not job:
        raise HTTPException(404, "job not found")
    data = {
        "job_id": job_id,
        "status": job.get("status", "running"),
        "started_at": job.get("started_at"),
        "finished_at": job.get("finished_at"),
        "source": job.get("source"),
        "sample_size": job.get("sample_size"),
        "evaluations": job.get("evaluations", []),
        "total": job.get("total"),
        "stages": job.get("stages", []),
        "error": job.get("error"),
    }
    return JSONResponse(data)


@router.get(
    "/crush/stream/{job_id}",
    tags=["Crush"],
    summary="SSE‑стрим этапов оценки",
    description="Серверные события с этапами crush:start, crush:report, crush:score, crush:summary и final.",
    responses={
        200: {
            "content": {"text/event-stream": {"example": "event: crush:score\ndata: {\"name\":\"Xor\"}\n\n"}},
            "description": "Поток серверных событий",
        }
    },
)
async def crush_stream(job_id: str):
    if job_id not in CRUSH_JOBS:
        raise HTTPException(404, "job not found")

    async def event_gen():
        idx = 0
        while True:
            job = CRUSH_JOBS.get(job_id)
            if not job:
                break
            stages = job.get("stages", [])
            while idx < len(stages):
                evt = stages[idx]
                idx += 1
                yield sse_format(evt.get("stage", "stage"), evt)
            if job.get("status") in ("completed", "error"):
                yield sse_format("final", {
                    "status": job.get("status"),
                    "total": job.get("total"),
                    "error": job.get("error"),
                })
                break
            await asyncio.sleep(0.2)

    return StreamingResponse(event_gen(), media_type="text/event-stream")
