from dataclasses import dataclass
from fastapi import Request, Response
import uuid

from app.config import settings


@dataclass(frozen=True)
class AnonymousIdentity:
    """Opaque browser token used for interest tracking; never tied to a real account."""
    user_id: str
    is_new: bool = False


def get_anonymous_identity(request: Request, response: Response) -> AnonymousIdentity:
    user_id = request.cookies.get(settings.INTEREST_COOKIE_NAME)
    if user_id:
        return AnonymousIdentity(user_id=user_id)

    user_id = str(uuid.uuid4())
    response.set_cookie(
        key=settings.INTEREST_COOKIE_NAME,
        value=user_id,
        max_age=settings.INTEREST_COOKIE_MAX_AGE,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.ENVIRONMENT == "production",
    )
    return AnonymousIdentity(user_id=user_id, is_new=True)
