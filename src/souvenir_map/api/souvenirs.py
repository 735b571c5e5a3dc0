"""Souvenir endpoints: transcription, creation and the public listing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, Request
from starlette.concurrency import run_in_threadpool

from souvenir_map.api.models import CreateSouvenirRequest, ProcessAudioRequest
from souvenir_map.domain.accounts import Identity
from souvenir_map.domain.souvenirs import souvenir_to_dict
from souvenir_map.exceptions import AuthenticationError, ValidationError

if TYPE_CHECKING:
    from souvenir_map.containers import AppContainer

router = APIRouter(tags=["souvenirs"])


async def require_identity(
    request: Request, authorization: str | None = Header(default=None)
) -> Identity:
    """Resolve the bearer session token to an identity."""
    if not authorization:
        raise AuthenticationError("Missing authorization header")
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        raise AuthenticationError("Invalid authorization token")
    token = token.strip()
    container: AppContainer = request.app.state.container
    identity = container.auth_gateway.get_user(token) if token else None
    if identity is None:
        raise AuthenticationError("Invalid authorization token")
    return identity


@router.post("/process-audio")
async def process_audio(
    body: ProcessAudioRequest,
    request: Request,
    _identity: Identity = Depends(require_identity),
) -> dict[str, str]:
    """Return a transcript for uploaded audio."""
    if not body.audio_url:
        raise ValidationError("Missing audioUrl parameter")
    container: AppContainer = request.app.state.container
    transcript = await container.transcription_service.transcribe(body.audio_url)
    return {"transcript": transcript}


@router.post("/create-souvenir")
async def create_souvenir(
    body: CreateSouvenirRequest,
    request: Request,
    identity: Identity = Depends(require_identity),
) -> dict[str, object]:
    """Mint and persist a souvenir owned by the caller."""
    draft = body.to_draft()
    container: AppContainer = request.app.state.container
    souvenir = await run_in_threadpool(
        container.souvenir_service.create_souvenir, identity.id, draft
    )
    return souvenir_to_dict(souvenir)


@router.get("/souvenirs")
async def list_souvenirs(request: Request) -> dict[str, object]:
    """Return every souvenir, newest first."""
    container: AppContainer = request.app.state.container
    souvenirs = container.souvenir_service.list_souvenirs()
    return {"souvenirs": [souvenir_to_dict(souvenir) for souvenir in souvenirs]}
