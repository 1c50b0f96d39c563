"""
Request-scoped dependencies for school routes.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import Request

from core.errors import ValidationError

from .repository import SchoolRepository
from .validation import MSG_BODY_NOT_OBJECT


def get_repository(request: Request) -> SchoolRepository:
    return request.app.state.repository


async def get_json_body(request: Request) -> Any:
    """
    Raw decoded JSON body. An empty body counts as `{}`; shape checks are
    left to the validator.
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except (ValueError, RecursionError) as exc:
        raise ValidationError(MSG_BODY_NOT_OBJECT) from exc
