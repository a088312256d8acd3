from dataclasses import dataclass
from typing import Optional

from fastapi import Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from todo_api.errors import Unauthenticated
from todo_api.security import decode_access_token

bearer_scheme = HTTPBearer(
    auto_error=False,
    scheme_name="Bearer",
    description="JWT Bearer token authentication. Format: Bearer <token>",
)


@dataclass(frozen=True)
class RequestContext:
    user_id: int


async def require_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> RequestContext:
    """Gate for protected routes.

    A missing or non-Bearer Authorization header raises Unauthenticated;
    a token that fails verification raises InvalidToken. Both are 401.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()
    return RequestContext(user_id=decode_access_token(credentials.credentials))
