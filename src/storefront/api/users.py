"""FastAPI endpoints for accounts and session tokens."""

from fastapi import APIRouter, Depends, Request
from protean.utils.globals import current_domain

from storefront.admin.detail import user_detail
from storefront.api.schemas import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    StatusResponse,
    UserDetailResponse,
    UserListResponse,
    UserResponse,
    VerifyResponse,
)
from storefront.auth.dependencies import current_claims, rate_limited, require_admin
from storefront.auth.service import Session
from storefront.user.administration import DeleteUser
from storefront.user.user import User

router = APIRouter(prefix="/users", tags=["users"])
auth_router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(session: Session) -> AuthResponse:
    return AuthResponse(token=session.token, user=UserResponse(**session.user.as_dict()))


@router.post("/register", status_code=201, response_model=AuthResponse, dependencies=[Depends(rate_limited)])
async def register(body: RegisterRequest, request: Request) -> AuthResponse:
    session = request.app.state.auth.register(
        full_name=body.full_name,
        email=body.email,
        password=body.password,
    )
    return _auth_response(session)


@router.post("/login", response_model=AuthResponse, dependencies=[Depends(rate_limited)])
async def login(body: LoginRequest, request: Request) -> AuthResponse:
    session = request.app.state.auth.login(email=body.email, password=body.password)
    return _auth_response(session)


@router.get("", response_model=UserListResponse)
async def list_users(_admin: dict = Depends(require_admin)) -> UserListResponse:
    users = current_domain.repository_for(User).list_all()
    return UserListResponse(users=[UserResponse(**u.as_dict()) for u in users])


@router.get("/{user_id}", response_model=UserDetailResponse)
async def get_user(user_id: str, _admin: dict = Depends(require_admin)) -> UserDetailResponse:
    return UserDetailResponse(**user_detail(user_id))


@router.delete("/{user_id}", response_model=StatusResponse)
async def delete_user(user_id: str, _admin: dict = Depends(require_admin)) -> StatusResponse:
    current_domain.process(DeleteUser(user_id=user_id), asynchronous=False)
    return StatusResponse(status="deleted")


@auth_router.post("/verify", response_model=VerifyResponse, dependencies=[Depends(rate_limited)])
async def verify_token(claims: dict = Depends(current_claims)) -> VerifyResponse:
    return VerifyResponse(claims=claims)
