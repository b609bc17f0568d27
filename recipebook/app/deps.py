# recipebook/app/deps.py
from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from supabase import Client, create_client

from recipebook.app.config import settings
from recipebook.app.infra.db.supabase_generation_repo import SupabaseGenerationRepository
from recipebook.app.services.recipe_generation import RecipeGenerationService, build_recipe_client

logger = logging.getLogger(__name__)

_client: Client | None = None


def get_supabase() -> Client:
    global _client
    if _client is None:
        _client = create_client(str(settings.SUPABASE_URL),
                                settings.SUPABASE_SERVICE_ROLE_KEY)
    return _client


auth_scheme = HTTPBearer(auto_error=False)


class CurrentUser(BaseModel):
    id: str
    email: str | None = None


async def get_current_user(
    cred: HTTPAuthorizationCredentials | None = Depends(auth_scheme),
    supa: Client = Depends(get_supabase),
) -> CurrentUser:
    """
    Resolve the Supabase Auth access token in the Authorization header to
    its owner. Every way the token can fail ends in a 401 with a short reason.
    """
    if cred is None or cred.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")

    try:
        res = supa.auth.get_user(cred.credentials)
    except Exception as e:
        # gotrue raises for expired, revoked and malformed JWTs alike.
        logger.info("Access token rejected by Supabase Auth: %s", e)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid/expired token") from e

    user = res.user if res else None
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return CurrentUser(id=str(user.id), email=user.email)


def get_generation_service(supa: Client = Depends(get_supabase)) -> RecipeGenerationService:
    client = build_recipe_client(
        settings.OPENROUTER_API_KEY.get_secret_value(),
        settings.OPENROUTER_MODEL,
        base_url=settings.OPENROUTER_BASE_URL,
        timeout_seconds=settings.OPENROUTER_TIMEOUT_SECONDS,
    )
    return RecipeGenerationService(SupabaseGenerationRepository(supa), client)
