import logging

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession
from jose import JWTError, jwt
from pydantic import ValidationError
from task_api.database import get_db
from task_api.config import settings
from task_api.exceptions import Forbidden, Unauthorized
from task_api.models.user import User as UserModel
from task_api.schemas.user import TokenData

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")

__all__ = ["get_db", "get_current_user", "oauth2_scheme"]


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    token: str = Depends(oauth2_scheme)
):
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        token_data = TokenData(user_id=payload.get("sub"))
    except (JWTError, ValidationError):
        logger.info("Rejected invalid bearer token")
        raise Forbidden("Forbidden: Invalid token")
    if token_data.user_id is None:
        raise Forbidden("Forbidden: Invalid token")

    user = await db.get(UserModel, token_data.user_id)
    if user is None:
        raise Unauthorized("Could not validate credentials")
    return user
