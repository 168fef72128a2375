import base64
from typing import Any, Dict, List


def to_data_uri(image: bytes, content_type: str) -> str:
    """``data:<content_type>;base64,<payload>``, renderable directly by a browser."""
    payload = base64.b64encode(image).decode("ascii")
    return f"data:{content_type};base64,{payload}"


def to_buffer_json(image: bytes) -> Dict[str, Any]:
    """Raw bytes in the ``{"type": "Buffer", "data": [...]}`` shape clients expect."""
    data: List[int] = list(image)
    return {"type": "Buffer", "data": data}
