from __future__ import annotations

import logging
import math

from fastapi import APIRouter, Depends, Query, status

from src.application.access import Actor
from src.application.use_cases.auth import get_me, list_users, login_user, register_user
from src.infrastructure.auth.context import AuthContext
from src.infrastructure.auth.jwt_service import JWTService
from src.infrastructure.auth.password import PasswordHasher
from src.interfaces.http.deps import (
    get_actor,
    get_auth_context,
    get_jwt_service,
    get_password_hasher,
    get_uow,
)
from src.interfaces.http.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MeResponse,
    PaginationInfo,
    RegisterRequest,
    UserResponse,
    UsersListResponse,
)

router = APIRouter(prefix="", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/auth/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    uow=Depends(get_uow),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    jwt_service: JWTService = Depends(get_jwt_service),
) -> LoginResponse:
    result = await login_user.execute(
        uow=uow,
        payload=login_user.LoginInput(username=payload.username, password=payload.password),
        password_hasher=password_hasher,
        jwt_service=jwt_service,
    )
    logger.info("User %s logged in", result.user_id)
    return LoginResponse(
        access_token=result.access_token,
        token_type=result.token_type,
        user_id=result.user_id,
        username=result.username,
        organization_id=result.organization_id,
        role=result.role,
    )


@router.get("/me", response_model=MeResponse)
async def read_me(
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> MeResponse:
    result = await get_me.execute(uow=uow, user_id=context.user_id, claims=context.claims)
    return MeResponse(
        user_id=result.user_id,
        username=result.username,
        email=result.email,
        role=result.role,
        organization_id=result.organization_id,
        organization_name=result.organization_name,
        claims=result.claims,
    )


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    actor: Actor = Depends(get_actor),
    uow=Depends(get_uow),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserResponse:
    user = await register_user.execute(
        uow=uow,
        actor=actor,
        payload=register_user.RegisterUserInput(
            username=payload.username,
            email=payload.email,
            password=payload.password,
            role=payload.role,
            is_active=payload.is_active,
        ),
        password_hasher=password_hasher,
    )
    logger.info("User %s registered by %s", user.id, actor.user_id)
    return UserResponse.model_validate(user)


@router.get("/users", response_model=UsersListResponse)
async def list_organization_users(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    actor: Actor = Depends(get_actor),
    uow=Depends(get_uow),
) -> UsersListResponse:
    result = await list_users.execute(uow=uow, actor=actor, page=page, limit=limit)
    return UsersListResponse(
        users=[UserResponse.model_validate(u) for u in result.users],
        pagination=PaginationInfo(
            page=result.page,
            limit=result.limit,
            total=result.total,
            pages=math.ceil(result.total / result.limit) if result.total else 0,
        ),
    )
