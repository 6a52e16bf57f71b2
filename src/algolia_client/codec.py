from __future__ import annotations
import json
from enum import Enum
from typing import Any, Dict, Mapping
from pydantic import BaseModel


def canonical_key(key: Any) -> str:
    if isinstance(key, Enum):
        return str(key.value)
    return str(key)


def normalize_object(obj: Any) -> Dict[str, Any]:
    """Turn a mapping or pydantic model into a plain dict keyed by ``str``."""
    if isinstance(obj, BaseModel):
        obj = obj.model_dump(by_alias=True, mode="json")
    if not isinstance(obj, Mapping):
        raise TypeError(f"Expected a mapping or pydantic model, got {type(obj).__name__}")
    return {canonical_key(k): v for k, v in obj.items()}


def _default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, mode="json")
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode(value: Any) -> bytes:
    return json.dumps(value, default=_default, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def decode(raw: bytes) -> Any:
    # raises ValueError (JSONDecodeError / UnicodeDecodeError) on malformed input
    return json.loads(raw)
