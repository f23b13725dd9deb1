import os
from dataclasses import dataclass
from typing import Optional


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


@dataclass
class Settings:
    crush_workers: int = 1
    distribution_ideal: Optional[int] = None  # None -> sample_size // buckets
    max_upload_bytes: int = 16 * 1024 * 1024  # 16 MiB
    thread_pool_workers: int = 0
    remote_timeout: int = 8


def load_settings() -> Settings:
    """Read service settings from the environment.

    Malformed integers fall back to the defaults instead of failing startup.
    """
    ideal_env = os.getenv("CRUSH_DISTRIBUTION_IDEAL")
    distribution_ideal: Optional[int] = None
    if ideal_env:
        try:
            distribution_ideal = int(ideal_env)
        except ValueError:
            distribution_ideal = None
    return Settings(
        crush_workers=max(1, _env_int("CRUSH_WORKERS", 1)),
        distribution_ideal=distribution_ideal,
        max_upload_bytes=_env_int("MAX_UPLOAD_BYTES", 16 * 1024 * 1024),
        thread_pool_workers=_env_int("THREAD_POOL_WORKERS", 0),
        remote_timeout=_env_int("REMOTE_TIMEOUT", 8),
    )
