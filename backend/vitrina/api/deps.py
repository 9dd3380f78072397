from fastapi import Depends, HTTPException, status, Request
from fastapi_jwt import JwtAccessBearerCookie, JwtAuthorizationCredentials
from vitrina.core.config import Settings, settings as default_settings
from vitrina.services.store import CatalogStore
from vitrina.services.storage import ObjectStorage

# JWT en cookie HttpOnly. Hay un único firmador por proceso, construido con la
# configuración del módulo; create_app rechaza Settings con otra clave o expiración.
access_security = JwtAccessBearerCookie(
    secret_key=default_settings.SECRET_KEY,
    auto_error=False,
    access_expires_delta=default_settings.jwt_expires_delta,
)

ADMIN_ROLE = "admin"


def check_jwt_settings(settings: Settings):
    """Verifica que el firmador del proceso respeta la clave y la expiración de ``settings``"""
    if settings.SECRET_KEY != default_settings.SECRET_KEY:
        raise ValueError("SECRET_KEY must match the process settings used by the JWT signer")
    if settings.jwt_expires_delta != default_settings.jwt_expires_delta:
        raise ValueError("JWT_ACCESS_EXPIRES_DAYS must match the process settings used by the JWT signer")


def get_store(request: Request) -> CatalogStore:
    return request.app.state.store


def get_storage(request: Request) -> ObjectStorage:
    return request.app.state.storage


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def admin_required(
    credentials: JwtAuthorizationCredentials = Depends(access_security),
) -> dict:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )

    if credentials.subject.get("role") != ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )

    return credentials.subject
