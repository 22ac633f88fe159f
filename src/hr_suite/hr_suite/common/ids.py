from __future__ import annotations

import uuid

from ..core.constants import CODE_SEQUENCE_WIDTH


def new_id() -> str:
    return uuid.uuid4().hex


def sequence_code(prefix: str, year: int, existing: int) -> str:
    """Build ``<PREFIX>-<year>-<NNN>`` where NNN is ``existing + 1`` zero-padded."""
    return f"{prefix}-{year}-{existing + 1:0{CODE_SEQUENCE_WIDTH}d}"
