"""Identifier parsing shared by services and routes."""

import uuid
from typing import Optional, Union


def parse_id(value: Union[str, uuid.UUID, None]) -> Optional[uuid.UUID]:
    """
    Coerce a path/body identifier to a UUID.

    Returns None for anything that is not a UUID so callers can treat a
    malformed id exactly like an id that matches no row.

    >>> parse_id("missing-id") is None
    True
    """
    if value is None:
        return None
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None
