# hood_service/graphql/router.py
import logging

import jwt
from strawberry.fastapi import GraphQLRouter, BaseContext
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from .schema import schema
from hood_service.core.clock import Clock, get_clock, system_clock
from hood_service.core.config import settings
from hood_service.db.session import get_db

logger = logging.getLogger(__name__)


class CustomContext(BaseContext):
    def __init__(
        self,
        db: Session,
        user: dict | None = None,
        clock: Clock | None = None,
    ):
        self.db = db
        self.user = user
        # Resolvers read "now" from here, never from the system directly.
        self.clock = clock or system_clock


def decode_user(auth_header: str | None) -> dict | None:
    """Decode a ``Bearer <token>`` header into its JWT payload, or None."""
    if not auth_header:
        return None
    try:
        token = auth_header.split(" ")[1]
        return jwt.decode(
            token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
    except (jwt.PyJWTError, IndexError) as e:
        # An invalid or malformed token leaves the request anonymous.
        logger.debug(f"Ignoring invalid bearer token: {e}")
        return None


def get_context(
    request: Request,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> CustomContext:
    user = decode_user(request.headers.get("Authorization"))
    return CustomContext(db=db, user=user, clock=clock)


graphql_router = GraphQLRouter(
    schema,
    context_getter=get_context,
)
