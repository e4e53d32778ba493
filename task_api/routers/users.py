import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from task_api.dependencies import get_db, get_current_user
from task_api.exceptions import Unauthorized, ValidationFailed
from task_api.models.user import User as UserModel
from task_api.schemas.user import Token, UserCreate, UserLogin, UserRegistered, UserResponse
from task_api.utils.security import create_user_token, get_password_hash, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

@router.post("/register", response_model=UserRegistered, status_code=status.HTTP_201_CREATED)
async def register_user(user: UserCreate, db: AsyncSession = Depends(get_db)):
    try:
        user_data = user.model_dump(exclude={"password"})
        hashed_password = get_password_hash(user.password)
        new_user = UserModel(**user_data, hashed_password=hashed_password)
        db.add(new_user)
        await db.commit()
        await db.refresh(new_user)
    except IntegrityError:
        await db.rollback()
        raise ValidationFailed("User already exists")

    logger.info("Registered user %s", new_user.user_id)
    return {
        "user_id": new_user.user_id,
        "username": new_user.username,
        "email": new_user.email,
        "access_token": create_user_token(new_user),
    }

@router.post("/login", response_model=Token)
async def login_user(credentials: UserLogin, db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(UserModel).filter(UserModel.email == credentials.email))
    user = result.scalars().first()

    if not user or not verify_password(credentials.password, user.hashed_password):
        raise Unauthorized("Incorrect email or password")
    return {"access_token": create_user_token(user), "token_type": "bearer"}

@router.get("/current", response_model=UserResponse)
async def get_current(current_user: UserModel = Depends(get_current_user)):
    return current_user
