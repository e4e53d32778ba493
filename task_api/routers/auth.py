from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from task_api.dependencies import get_db
from task_api.exceptions import Unauthorized
from task_api.models.user import User as UserModel
from task_api.schemas.user import Token
from task_api.utils.security import verify_password, create_user_token

router = APIRouter(tags=["auth"])

@router.post("/token", response_model=Token)
async def login_for_access_token(
    db: AsyncSession = Depends(get_db),
    form_data: OAuth2PasswordRequestForm = Depends()
):
    result = await db.execute(select(UserModel).filter(UserModel.username == form_data.username))
    user = result.scalars().first()

    if not user or not verify_password(form_data.password, user.hashed_password):
        raise Unauthorized("Incorrect username or password")
    return {"access_token": create_user_token(user), "token_type": "bearer"}
