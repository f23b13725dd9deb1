class CrushError(Exception):
    """Base class for failures surfaced around the crush pipeline."""


class SourceExhausted(CrushError):
    """A finite source ran out of bytes before the sample was complete."""

    def __init__(self, needed: int, available: int):
        self.needed = needed
        self.available = available
        super().__init__(f"source exhausted: needed {needed} bytes, only {available} available")


class UnknownSource(CrushError):
    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"unknown source kind: {kind!r}")


class UploadTooLarge(CrushError):
    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"upload of {size} bytes exceeds limit of {limit} bytes")
