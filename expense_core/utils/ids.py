"""
Identifier Generation

Two flavours:
- generate_id(): timestamp + random suffix, short and roughly sortable
- generate_uuid(): random version-4 UUID in canonical 8-4-4-4-12 layout

generate_id is not cryptographically secure. Collisions are possible but
negligible for a single device holding thousands of records.
"""

import random
import string
import time
from uuid import uuid4

_BASE36 = string.digits + string.ascii_lowercase


def generate_id() -> str:
    """Return millisecond timestamp followed by 9 random base-36 characters."""
    timestamp = str(int(time.time() * 1000))
    suffix = "".join(random.choices(_BASE36, k=9))
    return timestamp + suffix


def generate_uuid() -> str:
    """Return a random version-4 UUID string (variant nibble 8, 9, a or b)."""
    return str(uuid4())
