"""Identifier generation for locally created entities."""

import secrets
import time


def generate_id() -> str:
    """Return a time-derived id with a short random suffix.

    The millisecond prefix keeps ids roughly sortable by creation time, the
    suffix keeps ids created within the same millisecond apart.
    """
    return f"{time.time_ns() // 1_000_000}{secrets.token_hex(3)}"
