import logging

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.errors import DuplicateUser, UnknownEmail, WrongPassword
from todo_api.models.user import User
from todo_api.repositories.user_repo import UserRepository
from todo_api.schemas.user import LoginResponse, LoginUser, UserCreate, UserLogin
from todo_api.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self):
        self.repo = UserRepository()

    async def register(self, db: AsyncSession, user_in: UserCreate) -> User:
        if await self.repo.get_by_email(db, user_in.email) is not None:
            raise DuplicateUser()

        password_hash = await run_in_threadpool(hash_password, user_in.password)
        user = User(
            username=user_in.username,
            email=user_in.email,
            password_hash=password_hash,
        )
        try:
            user = await self.repo.create(db, user)
            await db.commit()
        except IntegrityError as exc:
            # lost a race with a concurrent registration for the same email
            await db.rollback()
            raise DuplicateUser() from exc

        logger.info("registered user id=%s", user.id)
        return user

    async def login(self, db: AsyncSession, credentials: UserLogin) -> LoginResponse:
        user = await self.repo.get_by_email(db, credentials.email)
        if user is None:
            logger.info("login rejected: unknown email")
            raise UnknownEmail()

        if not await run_in_threadpool(verify_password, credentials.password, user.password_hash):
            logger.info("login rejected: wrong password for user id=%s", user.id)
            raise WrongPassword()

        token = create_access_token(user.id)
        logger.info("issued token for user id=%s", user.id)
        return LoginResponse(user=LoginUser.model_validate(user), token=token)
