from fastapi import APIRouter

from streamcrush.domain.schemas import SourcesInfo, TransformInfo
from streamcrush.services.analysis import SAMPLE_SIZE
from streamcrush.services.crusher import stream_bytes_required
from streamcrush.services.source import SOURCE_KINDS
from streamcrush.services.transform import TRANSFORM_BATTERY


router = APIRouter()


@router.get(
    "/sources",
    response_model=SourcesInfo,
    tags=["Sources"],
    summary="Генераторы и набор преобразований",
    description="Список встроенных источников, преобразований и минимальный размер загружаемого файла.",
)
async def sources():
    return SourcesInfo(
        sources=SOURCE_KINDS,
        transforms=[TransformInfo(name=name, max_draws=cls.max_draws) for name, cls in TRANSFORM_BATTERY.items()],
        sample_size=SAMPLE_SIZE,
        bytes_required=stream_bytes_required(),
    )
