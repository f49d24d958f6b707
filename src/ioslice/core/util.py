from __future__ import annotations
import operator
from typing import Any, Dict, Iterable

from .model import SliceInfo


def check_offset(name: str, value: Any) -> int:
    """Return `value` as an int, rejecting non-integers and negatives."""
    try:
        value = operator.index(value)
    except TypeError:
        raise TypeError(f"{name} must be an integer, not {type(value).__name__}") from None
    if value < 0:
        raise ValueError(f"{name} cannot be negative: {value}")
    return value


def info_asdict(info: SliceInfo, *, fields: Iterable[str] | None = None) -> Dict[str, Any]:
    """Return a JSON-serialisable dict (skip None) optionally filtered."""
    payload = {
        "start": info.start,
        "length": info.length,
        "end": info.start + info.length,
        "position": info.position,
        "remaining": info.remaining,
        "readable": info.readable,
        "writable": info.writable,
        "resource_size": info.resource_size,
    }
    if info.resource_size is not None:
        payload["complete"] = info.start + info.length <= info.resource_size
    payload = {k: v for k, v in payload.items() if v is not None}
    if fields:
        wanted = set(fields)
        payload = {k: v for k, v in payload.items() if k in wanted}
    return payload
