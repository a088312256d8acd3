from typing import Any

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.models.todo import Todo
from todo_api.repositories.base import BaseRepository


class TodoRepository(BaseRepository[Todo]):
    def __init__(self):
        super().__init__(Todo)

    async def get_owned(self, db: AsyncSession, todo_id: int, owner_id: int) -> Todo | None:
        return await self.get_by(db, id=todo_id, owner_id=owner_id)

    async def list_owned(self, db: AsyncSession, owner_id: int) -> list[Todo]:
        return await self.list(db, where={"owner_id": owner_id}, order_by=(Todo.id,))

    async def update_owned(
        self, db: AsyncSession, todo_id: int, owner_id: int, changes: dict[str, Any]
    ) -> int:
        return await self.update_where(
            db,
            {"id": todo_id, "owner_id": owner_id},
            {**changes, "updated_at": func.now()},
        )

    async def delete_owned(self, db: AsyncSession, todo_id: int, owner_id: int) -> int:
        return await self.delete_where(db, id=todo_id, owner_id=owner_id)
