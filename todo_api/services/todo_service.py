import logging

from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.errors import NotFound
from todo_api.models.todo import Todo
from todo_api.repositories.todo_repo import TodoRepository
from todo_api.schemas.todo import TodoCreate, TodoOut, TodoUpdate

logger = logging.getLogger(__name__)


class TodoService:
    """Todo operations scoped to a single owner.

    A todo that exists but belongs to someone else is reported exactly like
    one that does not exist.
    """

    def __init__(self):
        self.repo = TodoRepository()

    async def create_todo(self, db: AsyncSession, owner_id: int, todo_in: TodoCreate) -> Todo:
        todo = Todo(
            title=todo_in.title,
            description=todo_in.description,
            completed=False,
            owner_id=owner_id,
        )
        todo = await self.repo.create(db, todo)
        await db.commit()
        logger.debug("user id=%s created todo id=%s", owner_id, todo.id)
        return todo

    async def list_todos(self, db: AsyncSession, owner_id: int) -> list[Todo]:
        return await self.repo.list_owned(db, owner_id)

    async def get_todo(self, db: AsyncSession, owner_id: int, todo_id: int) -> Todo:
        todo = await self.repo.get_owned(db, todo_id, owner_id)
        if todo is None:
            raise NotFound()
        return todo

    async def update_todo(
        self, db: AsyncSession, owner_id: int, todo_id: int, todo_in: TodoUpdate
    ) -> Todo:
        changes = todo_in.model_dump(exclude_none=True)
        matched = await self.repo.update_owned(db, todo_id, owner_id, changes)
        if not matched:
            await db.rollback()
            raise NotFound()
        await db.commit()
        logger.debug("user id=%s updated todo id=%s fields=%s", owner_id, todo_id, sorted(changes))
        return await self.get_todo(db, owner_id, todo_id)

    async def delete_todo(self, db: AsyncSession, owner_id: int, todo_id: int) -> TodoOut:
        todo = await self.get_todo(db, owner_id, todo_id)
        deleted = TodoOut.model_validate(todo)
        if not await self.repo.delete_owned(db, todo_id, owner_id):
            await db.rollback()
            raise NotFound()
        await db.commit()
        logger.debug("user id=%s deleted todo id=%s", owner_id, todo_id)
        return deleted
