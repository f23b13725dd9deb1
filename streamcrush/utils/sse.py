import json
from typing import Any, Dict


def sse_format(event: str, data: Dict[str, Any]) -> str:
    # default=int covers numpy integer scalars left in stage payloads
    return f"event: {event}\n" f"data: {json.dumps(data, ensure_ascii=False, default=int)}\n\n"
