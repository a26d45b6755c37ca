"""JWT-based stateless authentication."""
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from app.api.deps import (
    CurrentUser,
    create_access_token,
    create_refresh_token,
    decode_token,
    get_password_hash,
    parse_object_id,
    verify_password,
)
from app.models.user import User, UserCreate, UserOut

router = APIRouter()


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class LoginRequest(BaseModel):
    email: str
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


def _issue_tokens(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(str(user.id), user.role.value),
        refresh_token=create_refresh_token(str(user.id)),
    )


@router.post("/login", response_model=TokenResponse)
async def login(req: LoginRequest):
    user = await User.find_one(User.email == req.email)
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if not verify_password(req.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return _issue_tokens(user)


@router.post("/register", response_model=TokenResponse)
async def register(data: UserCreate):
    existing = await User.find_one(User.email == data.email)
    if existing:
        raise HTTPException(status_code=400, detail="Email already registered")
    user = User(
        email=data.email,
        hashed_password=get_password_hash(data.password),
        role=data.role,
        full_name=data.full_name,
        school_name=data.school_name,
    )
    await user.insert()
    return _issue_tokens(user)


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(req: RefreshRequest):
    user_id = decode_token(req.refresh_token, "refresh")
    user = await User.get(parse_object_id(user_id, "token subject"))
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="User not found or inactive")
    return _issue_tokens(user)


@router.get("/me", response_model=UserOut)
async def me(user: CurrentUser):
    return {
        "id": str(user.id),
        "email": user.email,
        "role": user.role,
        "full_name": user.full_name,
        "school_name": user.school_name,
        "is_active": user.is_active,
    }
