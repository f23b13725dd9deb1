from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from streamcrush.core.tags import tags_metadata
from streamcrush.routers.crush import router as crush_router
from streamcrush.routers.sources import router as sources_router
from streamcrush.routers.health import router as health_router
from streamcrush.core.concurrency import init_default_executor, shutdown_default_executor


app = FastAPI(
    title="Stream Crush Service",
    version="0.1.0",
    description=(
        "Оценка качества потоков 64-битных псевдослучайных чисел.\n\n"
        "Поток и 12 ослабляющих преобразований проверяются на циклы, коллизии, "
        "зависимость битов и распределение; оценки суммируются."
    ),
    openapi_tags=tags_metadata,
    docs_url="/swagger",
    redoc_url=None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def _startup():
    # Crush jobs run on the loop's default executor
    init_default_executor()


@app.on_event("shutdown")
async def _shutdown():
    shutdown_default_executor()


# Routers
app.include_router(crush_router)
app.include_router(sources_router)
app.include_router(health_router)
