"""HTTP routes for admin authentication."""

from fastapi import APIRouter, Request, Response

from auth.security_middleware import get_client_ip
from auth.service import AuthService
from auth.types import AdminLogin
from api.base import success_response


def create_auth_router(auth_service: AuthService) -> APIRouter:
    """Create admin auth router with injected service."""
    router = APIRouter(tags=["auth"])

    @router.post("/login")
    async def login(request: Request, response: Response, body: AdminLogin):
        """Check credentials and set the session cookie.

        AuthenticationError propagates to the global handler (401).
        """
        session = auth_service.issue_session(
            username=body.username,
            password=body.password,
            ip_address=get_client_ip(request),
            user_agent=request.headers.get("User-Agent"),
        )

        response.set_cookie(
            key=auth_service.cookie_name,
            value=session.token,
            httponly=True,
            secure=auth_service.secure_cookies,
            samesite="strict",
            max_age=session.max_age_seconds,
            path="/",
        )

        return success_response({
            "role": session.claims.role,
            "username": session.claims.sub,
            "expires_at": session.claims.exp.isoformat(),
        }).model_dump(mode="json")

    @router.post("/logout")
    async def logout(request: Request, response: Response):
        """Clear the session cookie."""
        auth_service.logout(
            token=request.cookies.get(auth_service.cookie_name),
            ip_address=get_client_ip(request),
        )

        response.delete_cookie(
            key=auth_service.cookie_name,
            httponly=True,
            secure=auth_service.secure_cookies,
            samesite="strict",
            path="/",
        )

        return success_response({"message": "Logged out successfully"}).model_dump(mode="json")

    @router.get("/me")
    async def get_current_session(request: Request):
        """Echo the verified role and identity. Middleware guarantees a session."""
        claims = request.state.admin
        return success_response({
            "role": claims.role,
            "username": claims.sub,
            "expires_at": claims.exp.isoformat(),
        }).model_dump(mode="json")

    return router
