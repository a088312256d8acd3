from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.database import get_db
from todo_api.schemas.user import LoginResponse, UserCreate, UserLogin, UserOut
from todo_api.services.user_service import UserService

router = APIRouter()
service = UserService()


@router.post("/register", response_model=UserOut, status_code=201)
async def register(user_in: UserCreate, db: AsyncSession = Depends(get_db)):
    return await service.register(db, user_in)


@router.post("/login", response_model=LoginResponse)
async def login(credentials: UserLogin, db: AsyncSession = Depends(get_db)):
    return await service.login(db, credentials)
