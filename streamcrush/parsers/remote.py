import requests

from streamcrush.core.errors import UploadTooLarge

DEFAULT_TIMEOUT = 8


def fetch_bytes(url: str, timeout: int = DEFAULT_TIMEOUT, limit: int | None = None) -> bytes:
    """Download a raw payload to be crushed as a big-endian stream."""
    resp = requests.get(url, timeout=timeout, headers={"User-Agent": "streamcrush/1.0"})
    resp.raise_for_status()
    content = resp.content
    if limit is not None and len(content) > limit:
        raise UploadTooLarge(len(content), limit)
    return content
