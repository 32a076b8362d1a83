"""Entity identity resolution for TOON records."""

from __future__ import annotations

import logging
import math
import uuid
from collections.abc import Mapping
from typing import Any, Callable, Optional

from .encoder import render_element
from .values import to_value

logger = logging.getLogger(__name__)

FALLBACK_ID_LENGTH = 8

TokenFactory = Callable[[], str]


def generate_fallback_id() -> str:
    """Return a short random token (first 8 characters of a UUID4)."""
    return str(uuid.uuid4())[:FALLBACK_ID_LENGTH]


def is_truthy(value: Any) -> bool:
    """Truthiness used for key fields; NaN counts as missing."""
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


class IdentityResolver:
    """Resolves the entity identifier of a record.

    The record's key field wins when it holds a truthy value. Otherwise a
    token is drawn from ``token_factory``; collisions between generated
    tokens are not detected.
    """

    def __init__(self, token_factory: Optional[TokenFactory] = None):
        self.token_factory = token_factory or generate_fallback_id

    def resolve(self, record: Any, key_field: str) -> str:
        if isinstance(record, Mapping):
            candidate = record.get(key_field)
            if is_truthy(candidate):
                return render_element(to_value(candidate))

        token = self.token_factory()
        if token is not None and not isinstance(token, str):
            token = str(token)
        if not token:
            token = generate_fallback_id()
        logger.debug(f"Key field '{key_field}' missing, generated fallback id {token}")
        return token
