from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.services.auth import AuthService, get_auth_service


router = APIRouter()


class SignUpBody(BaseModel):
    # Presence and format are checked by the validation service so every
    # violation is reported together
    email: str | None = None
    password: str | None = None
    name: str | None = None
    lastName: str | None = None
    phoneNumber: str | None = None
    birthdate: str | None = None
    url_profile: str | None = None
    adress: str | None = None


@router.post("/signUp", status_code=201)
def sign_up(body: SignUpBody, auth: AuthService = Depends(get_auth_service)) -> dict:
    """PUBLIC: Register a user with the default role. Returns the profile without password."""
    user = auth.sign_up(body.model_dump())
    return user.to_output()


class SignInBody(BaseModel):
    email: str | None = None
    password: str | None = None


@router.post("/signIn")
def sign_in(body: SignInBody, auth: AuthService = Depends(get_auth_service)) -> dict:
    """PUBLIC: Exchange credentials for a bearer token."""
    return {"token": auth.sign_in(body.email, body.password)}
