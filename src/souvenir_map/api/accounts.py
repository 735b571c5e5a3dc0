"""Account endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from souvenir_map.api.models import CheckUsernameRequest
from souvenir_map.exceptions import ValidationError

if TYPE_CHECKING:
    from souvenir_map.containers import AppContainer

router = APIRouter(tags=["accounts"])


@router.post("/check-username")
async def check_username(
    body: CheckUsernameRequest, request: Request
) -> dict[str, bool]:
    """Report whether a username is free to claim."""
    if body.username is None:
        raise ValidationError("Missing username parameter")
    container: AppContainer = request.app.state.container
    return {"available": container.username_service.is_available(body.username)}
