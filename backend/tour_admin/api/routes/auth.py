"""
Two-step login, registration and logout
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from tour_admin.api.deps import FormDep, ModulesDep, SessionDep, login_throttle
from tour_admin.api.responses import respond
from tour_admin.business.base import with_action
from tour_admin.core.exceptions import ErrorCode, error_result
from tour_admin.sessions.session import clear_auth, get_pending, get_token, promote_pending, set_pending

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _login_data(result: Dict[str, Any]) -> Dict[str, Any]:
    data = result.get("data")
    return data if isinstance(data, dict) else {}


@router.post("/login", dependencies=[Depends(login_throttle)])
async def login(form: FormDep, session: SessionDep, modules: ModulesDep) -> JSONResponse:
    """
    Password step

    Credentials are held as pending in the session; the visitor is not
    authenticated until `/auth/verify-email` accepts the OTP code.
    """
    result = await modules["auth"].dispatch(with_action(form, "login"))
    if not result.get("success"):
        clear_auth(session)
        return respond(result)

    data = _login_data(result)
    token = data.get("accessToken")
    if not isinstance(token, str) or not token:
        logger.warning("Login response carried no access token")
        clear_auth(session)
        return respond({"success": False, **error_result(400, "Login failed", ErrorCode.BACKEND_REJECTED)})

    user = data.get("user") if isinstance(data.get("user"), dict) else None
    set_pending(session, token, user)
    return JSONResponse({"success": True, "requiresOtp": True, "data": {"user": user, "pendingToken": token}})


@router.post("/verify-email", dependencies=[Depends(login_throttle)])
async def verify_email(form: FormDep, session: SessionDep, modules: ModulesDep) -> JSONResponse:
    """OTP step: promotes the pending credentials on success."""
    pending_token, _ = get_pending(session)
    result = await modules["auth"].dispatch(with_action(form, "verify_email"), pending_token)
    if not result.get("success"):
        return respond(result)

    data = _login_data(result)
    token = data.get("accessToken") if isinstance(data.get("accessToken"), str) else None
    user = data.get("user") if isinstance(data.get("user"), dict) else None
    user = promote_pending(session, token, user)
    if user is None:
        return respond({"success": False, "error": {"status": 401, "message": "No pending login"}})
    return JSONResponse(
        {"success": True, "isAuthenticated": True, "data": {"user": user, "token": get_token(session)}}
    )


@router.post("/request-email-verification")
async def request_email_verification(form: FormDep, session: SessionDep, modules: ModulesDep) -> JSONResponse:
    pending_token, _ = get_pending(session)
    result = await modules["auth"].dispatch(with_action(form, "request_email_verification"), pending_token)
    return respond(result)


@router.post("/register")
async def register(form: FormDep, modules: ModulesDep) -> JSONResponse:
    return respond(await modules["auth"].dispatch(with_action(form, "register")))


@router.post("/logout")
async def logout(session: SessionDep, modules: ModulesDep) -> Any:
    """Always ends the local session; the backend call is best effort."""
    token = get_token(session) or get_pending(session)[0]
    if token:
        result = await modules["auth"].dispatch({"action": "logout"}, token)
        if not result.get("success"):
            logger.warning(f"Backend logout failed, ending session anyway: {result.get('error')}")
    session.clear()
    return {"success": True}
