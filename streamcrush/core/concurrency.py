import asyncio
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from .settings import load_settings

_executor: Optional[ThreadPoolExecutor] = None


def _pool_size(requested: int) -> int:
    if requested > 0:
        return requested
    # Crush jobs are CPU bound; CPU * 2, min 4, max 32
    cpu = os.cpu_count() or 2
    return max(4, min(32, cpu * 2))


def init_default_executor() -> None:
    """Initialize and set loop's default ThreadPoolExecutor.

    Max workers can be configured via env var THREAD_POOL_WORKERS.
    """
    global _executor
    if _executor is not None:
        return
    max_workers = _pool_size(load_settings().thread_pool_workers)
    loop = asyncio.get_event_loop()
    _executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="crush-worker")
    loop.set_default_executor(_executor)


def shutdown_default_executor() -> None:
    global _executor
    if _executor is not None:
        _executor.shutdown(wait=False, cancel_futures=True)
        _executor = None
