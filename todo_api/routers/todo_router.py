from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.auth import RequestContext, require_user
from todo_api.database import get_db
from todo_api.schemas.todo import TodoCreate, TodoMessage, TodoOut, TodoUpdate
from todo_api.services.todo_service import TodoService

router = APIRouter()
service = TodoService()


@router.post("", response_model=TodoOut, status_code=201)
async def create_todo(
    todo_in: TodoCreate,
    ctx: RequestContext = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    return await service.create_todo(db, ctx.user_id, todo_in)


@router.get("", response_model=list[TodoOut])
async def list_todos(ctx: RequestContext = Depends(require_user), db: AsyncSession = Depends(get_db)):
    return await service.list_todos(db, ctx.user_id)


@router.get("/{todo_id}", response_model=TodoOut)
async def get_todo(
    todo_id: int,
    ctx: RequestContext = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    return await service.get_todo(db, ctx.user_id, todo_id)


@router.put("/{todo_id}", response_model=TodoMessage)
async def update_todo(
    todo_id: int,
    todo_in: TodoUpdate,
    ctx: RequestContext = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    todo = await service.update_todo(db, ctx.user_id, todo_id, todo_in)
    return TodoMessage(message="Todo updated", todo=TodoOut.model_validate(todo))


@router.delete("/{todo_id}", response_model=TodoMessage)
async def delete_todo(
    todo_id: int,
    ctx: RequestContext = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    todo = await service.delete_todo(db, ctx.user_id, todo_id)
    return TodoMessage(message="Todo deleted", todo=todo)
