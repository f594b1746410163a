from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import APIKeyHeader

from ...core.dependencies import get_persistence_gateway
from ...domain.errors import ServiceError
from ...domain.models import User
from ...domain.ports.persistence import UserRepository

# The header value is the token itself, no "Bearer" scheme.
_authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Per-request view of who is calling; ``identity`` is None for anonymous callers."""

    identity: Optional[User] = None


def resolve_request_context(
    token: Optional[str] = Depends(_authorization_header),
    users: UserRepository = Depends(get_persistence_gateway),
) -> RequestContext:
    """Resolve the Authorization header to a user. Unknown tokens are treated as anonymous."""
    if not token:
        return RequestContext()
    return RequestContext(identity=users.find_user_by_token(token))


def require_identity(context: RequestContext = Depends(resolve_request_context)) -> User:
    if context.identity is None:
        raise ServiceError.unauthorized()
    return context.identity
