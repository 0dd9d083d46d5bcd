from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import BackgroundTasks, Request

from src.application.access import Actor
from src.application.errors import AuthError
from src.application.events.dispatcher import dispatch_events
from src.config.settings import Settings, get_settings
from src.infrastructure.auth.context import AuthContext
from src.infrastructure.auth.jwt_service import JWTService
from src.infrastructure.auth.password import PasswordHasher
from src.infrastructure.db.session import SQLAlchemyUnitOfWork


async def get_auth_context(request: Request) -> AuthContext:
    context = getattr(request.state, "auth_context", None)
    if context is None:
        raise AuthError("Authentication required")
    return context


async def get_actor(request: Request) -> Actor:
    context = await get_auth_context(request)
    return context.actor()


async def get_uow(request: Request) -> AsyncIterator[SQLAlchemyUnitOfWork]:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        yield uow


def get_app_settings() -> Settings:
    return get_settings()


def get_password_hasher(request: Request) -> PasswordHasher:
    hasher = getattr(request.app.state, "password_hasher", None)
    if hasher is None:
        raise RuntimeError("Password hasher not configured")
    return hasher


def get_jwt_service(request: Request) -> JWTService:
    service = getattr(request.app.state, "jwt_service", None)
    if service is None:
        raise RuntimeError("JWT service not configured")
    return service


def schedule_event_dispatch(
    request: Request, background_tasks: BackgroundTasks, uow: SQLAlchemyUnitOfWork
) -> None:
    """Hand committed domain events to a background task (post-commit)."""
    events = uow.drain_events()
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory and events:
        push_sender = getattr(request.app.state, "push_sender", None)
        background_tasks.add_task(dispatch_events, session_factory, events, push_sender)
