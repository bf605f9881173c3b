"""Signed admin session cookie and the gate in front of ``/admin``.

The cookie holds an itsdangerous ``URLSafeTimedSerializer`` token carrying
``{"is_admin": true}``. Tokens older than the configured max age, or signed
with another key, are treated as absent.
"""

import hmac

import structlog
from fastapi import Request
from fastapi.responses import RedirectResponse
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

logger = structlog.get_logger(__name__)

SESSION_COOKIE = "session"
ADMIN_PREFIX = "/admin"
LOGIN_PATH = "/login"
_SALT = "lsdrinks-admin-session"


class SessionSigner:
    def __init__(self, secret_key: str, max_age: int) -> None:
        self.max_age = max_age
        self._serializer = URLSafeTimedSerializer(secret_key, salt=_SALT)

    def issue(self) -> str:
        return self._serializer.dumps({"is_admin": True})

    def is_admin(self, token: str | None) -> bool:
        if not token:
            return False
        try:
            payload = self._serializer.loads(token, max_age=self.max_age)
        except SignatureExpired:
            logger.info("Admin session expired")
            return False
        except BadSignature:
            logger.warning("Admin session with a bad signature")
            return False
        return isinstance(payload, dict) and payload.get("is_admin") is True


def credentials_match(email: str, password: str, expected_email: str, expected_password: str) -> bool:
    """Compare both fields in constant time; both are always checked."""
    email_ok = hmac.compare_digest(email.strip().lower().encode(), expected_email.strip().lower().encode())
    password_ok = hmac.compare_digest(password.encode(), expected_password.encode())
    return email_ok and password_ok


def is_admin_path(path: str) -> bool:
    return path == ADMIN_PREFIX or path.startswith(ADMIN_PREFIX + "/")


def install_session_gate(app, signer: SessionSigner) -> None:
    """Redirect unauthenticated ``/admin`` requests to the login page."""

    @app.middleware("http")
    async def admin_session_gate(request: Request, call_next):
        signed_in = signer.is_admin(request.cookies.get(SESSION_COOKIE))
        request.state.is_admin = signed_in

        if is_admin_path(request.url.path) and not signed_in:
            return RedirectResponse(LOGIN_PATH, status_code=303)
        return await call_next(request)
