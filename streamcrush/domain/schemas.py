from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class CrushConfig(BaseModel):
    source: str = Field("pcg64", description="constant, counter, lcg, xorshift64, pcg64, url")
    seed: Optional[int] = Field(None, ge=0, lt=2 ** 64)
    value: Optional[int] = Field(None, ge=0, lt=2 ** 64, description="value for the constant source")
    url: Optional[str] = Field(None, description="payload location for the url source")


class CrushStartResponse(BaseModel):
    job_id: str


class ReportSummary(BaseModel):
    sample_size: int
    cycle_length: Optional[int]
    collisions: int
    dependency_min: int
    dependency_max: int
    distribution_min: int
    distribution_max: int


class ScoreBreakdown(BaseModel):
    cycle: int
    collision: int
    bit_dependency: int
    distribution: int
    total: int


class Evaluation(BaseModel):
    name: str
    report: ReportSummary
    score: ScoreBreakdown
    total: int


class CrushResult(BaseModel):
    job_id: str
    status: str
    started_at: float
    finished_at: Optional[float] = None
    source: str
    sample_size: Optional[int] = None
    evaluations: List[Evaluation] = Field(default_factory=list)
    total: Optional[int] = None
    stages: List[Dict[str, Any]] = Field(default_factory=list)
    error: Optional[str] = None


class TransformInfo(BaseModel):
    name: str
    max_draws: int


class SourcesInfo(BaseModel):
    sources: Dict[str, str]
    transforms: List[TransformInfo]
    sample_size: int
    bytes_required: int
