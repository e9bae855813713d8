from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.database import get_db
from app.models.user import User
from app.auth import security
from app.auth import user_crud

logger = logging.getLogger(__name__)

ORGANIZER_ROLE = "organizer"

credentials_exception = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid token",
    headers={"WWW-Authenticate": "Bearer"},
)

async def get_current_user(
    token: str = Depends(security.oauth2_scheme),
    db: AsyncSession = Depends(get_db)
) -> User:
    token_data = security.decode_access_token(token)
    if token_data is None:
        logger.warning("Token verification failed: bad signature, expired, or no identity claim.")
        raise credentials_exception

    user = await user_crud.get_user_by_email(db, email=token_data.email)
    if user is None:
        logger.warning(f"Token identity {token_data.email} not found in users table.")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User not found")
    return user

async def get_current_organizer_user(
    current_user: User = Depends(get_current_user)
) -> User:
    if current_user.role != ORGANIZER_ROLE:
        logger.warning(f"User {current_user.email} with role '{current_user.role}' attempted organizer action.")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Organizer access required"
        )
    logger.info(f"Organizer access granted for: {current_user.email}")
    return current_user
