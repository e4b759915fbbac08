"""Identifier helpers."""

import time
import uuid


def new_id(prefix: str) -> str:
    """Return a fresh identifier such as ``tx-3f2a9c...``."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def placeholder_reference() -> str:
    """Return a generated reference number for records that lack one."""
    return f"REF-{int(time.time() * 1000)}"
