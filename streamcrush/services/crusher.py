from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Type

from .analysis import SAMPLE_SIZE, build_report
from .logging import StageLogger
from .scoring import ScoringConfig, score_report
from .source import StreamSource
from .transform import TRANSFORM_BATTERY, Transform

IDENTITY = "Identity"


def stream_bytes_required(
    battery: Mapping[str, Type[Transform]] = TRANSFORM_BATTERY,
    sample_size: int = SAMPLE_SIZE,
) -> int:
    """Bytes a finite big-endian source needs to survive a full crush."""
    max_draws = max([1] + [cls.max_draws for cls in battery.values()])
    return (sample_size + 1) * max_draws * 8


def _evaluate(
    name: str,
    stream: StreamSource,
    sample_size: int,
    config: ScoringConfig,
    logger: StageLogger,
) -> Dict[str, Any]:
    logger.stage("crush:evaluate", {"name": name})
    report = build_report(stream, sample_size)
    summary = report.summary()
    logger.stage("crush:report", {"name": name, **summary})
    points = score_report(report, config)
    logger.stage("crush:score", {"name": name, **points.as_dict()})
    return {"name": name, "report": summary, "score": points.as_dict(), "total": points.total}


def crush(
    source: StreamSource,
    emit: Callable[[str, dict], None] | None = None,
    battery: Mapping[str, Type[Transform]] = TRANSFORM_BATTERY,
    config: Optional[ScoringConfig] = None,
    sample_size: int = SAMPLE_SIZE,
    workers: int = 1,
) -> Dict[str, Any]:
    """Score a stream and every transform of it, summing the totals.

    Each evaluation runs on its own duplicate of ``source``; duplicates are
    taken here, before any draw, so ``source`` itself is left untouched.
    """
    logger = StageLogger(emit)
    started_at = time.time()
    config = (config or ScoringConfig()).for_sample(sample_size)
    config.warn_if_mismatched()
    logger.stage(
        "crush:start",
        {"sample_size": sample_size, "battery": [IDENTITY] + list(battery), "workers": workers},
    )

    streams: List[Tuple[str, StreamSource]] = [(IDENTITY, source.duplicate())]
    for name, cls in battery.items():
        streams.append((name, cls(source.duplicate())))

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="crush-eval") as pool:
            futures = [
                pool.submit(_evaluate, name, stream, sample_size, config, logger)
                for name, stream in streams
            ]
            evaluations = [f.result() for f in futures]
    else:
        evaluations = [
            _evaluate(name, stream, sample_size, config, logger) for name, stream in streams
        ]

    total = sum(e["total"] for e in evaluations)
    logger.stage("crush:summary", {"evaluations": len(evaluations), "total": total})

    finished_at = time.time()
    return {
        "status": "completed",
        "started_at": started_at,
        "finished_at": finished_at,
        "sample_size": sample_size,
        "evaluations": evaluations,
        "total": total,
        "stages": logger.events,
    }


def score(source: StreamSource) -> int:
    """Aggregate quality of ``source``: higher is better."""
    return crush(source)["total"]
