from __future__ import annotations

import base64
import binascii
import json
import logging

from pydantic import ValidationError

from .models import User

logger = logging.getLogger(__name__)


def generate_profile_code(user: User) -> str:
    """Encode ``user`` as base64 JSON so it can be pasted on another device."""
    payload = json.dumps(user.model_dump(by_alias=True), ensure_ascii=False)
    return base64.b64encode(payload.encode()).decode()


def parse_profile_code(code: str) -> User | None:
    """Decode a profile code; ``None`` when it is not a valid profile."""
    try:
        payload = base64.b64decode(code.strip(), validate=True).decode()
        return User.model_validate(json.loads(payload))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError, ValidationError):
        logger.warning("Rejected malformed profile code", exc_info=True)
        return None
