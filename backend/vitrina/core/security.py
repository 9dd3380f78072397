import secrets
from typing import Optional


def verify_admin_credentials(
    email: str,
    password: str,
    admin_email: str,
    admin_password: Optional[str]
) -> bool:
    """Comparación de la credencial fija del administrador"""
    if not admin_password:
        # Sin contraseña configurada no hay acceso al panel
        return False

    email_ok = secrets.compare_digest(
        email.strip().lower().encode('utf-8'),
        admin_email.strip().lower().encode('utf-8')
    )
    password_ok = secrets.compare_digest(
        password.encode('utf-8'),
        admin_password.encode('utf-8')
    )
    return email_ok and password_ok
