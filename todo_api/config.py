import logging
from functools import lru_cache
from typing import Annotated, Optional

from dotenv import load_dotenv
from pydantic import Field, ValidationError, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from sqlalchemy.engine import URL

from todo_api.errors import StartupError

load_dotenv()

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    # Database parts, used when DATABASE_URL is not given
    database_driver: str = "mysql+aiomysql"
    database_user: str = "app"
    database_password: str = "secret"
    database_host: str = "localhost"
    database_port: int = 3306
    database_name: str = "appdb"
    database_url: Optional[str] = Field(default=None, validate_default=True)

    # JWT
    jwt_secret: str = Field(min_length=1)
    jwt_algorithm: str = "HS256"
    jwt_expires_in: int = 3600

    cors_origins: Annotated[tuple[str, ...], NoDecode] = ("*",)
    log_level: str = "INFO"
    create_tables: bool = Field(default=False, alias="DB_CREATE_TABLES")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    @field_validator("database_url")
    @classmethod
    def _assemble_database_url(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        parts = info.data
        # a failed part is reported by its own field
        if v or "database_port" not in parts:
            return v
        return URL.create(
            parts["database_driver"],
            username=parts["database_user"],
            password=parts["database_password"],
            host=parts["database_host"],
            port=parts["database_port"],
            database=parts["database_name"],
        ).render_as_string(hide_password=False)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, v):
        if isinstance(v, str):
            return tuple(o.strip() for o in v.split(",") if o.strip()) or ("*",)
        return v

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper()


def load_settings() -> Settings:
    """Read settings from the environment and ``.env``.

    Raises StartupError when JWT_SECRET is missing or a value does not
    parse; both abort process start.
    """
    try:
        return Settings()
    except ValidationError as exc:
        logger.critical("invalid configuration; refusing to start: %s", exc)
        raise StartupError(str(exc)) from exc


@lru_cache
def get_settings() -> Settings:
    return load_settings()


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
