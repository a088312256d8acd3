from contextlib import asynccontextmanager
from typing import Iterable, Optional

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from todo_api.config import configure_logging, get_settings
from todo_api.database import get_engine, init_models
from todo_api.errors import register_exception_handlers
from todo_api.routers import auth_router, todo_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    if get_settings().create_tables:
        await init_models(get_engine())
    yield


def create_app(
    routers: Optional[Iterable[tuple[APIRouter, str, str]]] = None,
    title: str = "Todo API",
) -> FastAPI:
    """Build the application; fails with StartupError if JWT_SECRET is unset."""
    settings = get_settings()
    configure_logging(settings.log_level)

    if routers is None:
        routers = (
            (auth_router.router, "", "Auth"),
            (todo_router.router, "/todos", "Todos"),
        )

    app = FastAPI(title=title, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    for router, prefix, tag in routers:
        app.include_router(router, prefix=prefix, tags=[tag])

    # Root health
    @app.get("/")
    async def read_root():
        return {"status": "ok"}

    return app

