from fastapi import APIRouter, Depends, HTTPException, status, Response
from pydantic import BaseModel
from vitrina.api.deps import access_security, admin_required, get_settings, ADMIN_ROLE
from vitrina.core.config import Settings
from vitrina.core.security import verify_admin_credentials
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


# === Schemas ===

class LoginRequest(BaseModel):
    email: str
    password: str


class AdminResponse(BaseModel):
    email: str
    role: str


# === Routes ===

@router.post("/login", response_model=AdminResponse)
def login(data: LoginRequest, response: Response, settings: Settings = Depends(get_settings)):
    if not verify_admin_credentials(data.email, data.password, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD):
        logger.warning("Failed admin login for %s", data.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    # Cookie JWT de sesión
    subject = {"email": settings.ADMIN_EMAIL, "role": ADMIN_ROLE}
    access_token = access_security.create_access_token(subject=subject)
    access_security.set_access_cookie(response, access_token)

    return AdminResponse(**subject)


@router.post("/logout")
def logout(response: Response):
    access_security.unset_access_cookie(response)
    return {"message": "Logged out"}


@router.get("/me", response_model=AdminResponse)
def me(admin: dict = Depends(admin_required)):
    return AdminResponse(email=admin.get("email", ""), role=admin.get("role", ""))
