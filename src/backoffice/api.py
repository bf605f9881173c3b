"""Admin login and logout endpoints."""

import structlog
from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel, Field

from backoffice.session import ADMIN_PREFIX, SESSION_COOKIE, SessionSigner, credentials_match

logger = structlog.get_logger(__name__)


class LoginRequest(BaseModel):
    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=255)


def build_auth_router(config, signer: SessionSigner) -> APIRouter:
    router = APIRouter(tags=["auth"])

    @router.get("/login")
    async def login_page(request: Request):
        if signer.is_admin(request.cookies.get(SESSION_COOKIE)):
            return RedirectResponse(ADMIN_PREFIX, status_code=303)
        return {"status": "login required"}

    @router.post("/login")
    async def login(body: LoginRequest):
        if not credentials_match(body.email, body.password, config.admin_email, config.admin_password):
            logger.warning("Admin login rejected", email=body.email)
            return JSONResponse(
                status_code=401,
                content={"error": "Unauthorized", "messages": {"login": ["Email ou senha inválidos"]}},
            )

        response = JSONResponse(content={"status": "ok"})
        response.set_cookie(
            SESSION_COOKIE,
            signer.issue(),
            max_age=signer.max_age,
            httponly=True,
            samesite="lax",
            secure=config.session_cookie_secure,
        )
        logger.info("Admin signed in", email=body.email)
        return response

    @router.post("/logout")
    async def logout(response: Response):
        response.delete_cookie(SESSION_COOKIE)
        return {"status": "ok"}

    return router
