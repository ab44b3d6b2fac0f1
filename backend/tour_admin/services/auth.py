"""
Authentication calls against the backend `auth/*` endpoints
"""
from typing import Any, Dict

from .common import localized, not_configured, not_configured_error
from .rest import RestClientFactory, ServiceResult


async def login_user(factory: RestClientFactory, credentials: Dict[str, Any], language: str = "es") -> ServiceResult:
    """Password step of the two-step login. The backend answers with user + accessToken."""
    if not_configured(factory, "auth/login"):
        return not_configured_error()
    service = factory.service("auth/login")
    return await service.create(credentials, headers=localized(language))


async def register_user(factory: RestClientFactory, payload: Dict[str, Any], language: str = "es") -> ServiceResult:
    if not_configured(factory, "auth/register"):
        return not_configured_error()
    service = factory.service("auth/register")
    return await service.create(payload, headers=localized(language))


async def request_email_verification(
    factory: RestClientFactory, payload: Dict[str, Any], token: str = "", language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "auth/request-email-verification"):
        return not_configured_error()
    service = factory.service("auth/request-email-verification", token)
    return await service.create(payload, headers=localized(language))


async def verify_email(
    factory: RestClientFactory, payload: Dict[str, Any], token: str = "", language: str = "es"
) -> ServiceResult:
    """OTP step. `token` is the pending token returned by the password step."""
    if not_configured(factory, "auth/verify-email"):
        return not_configured_error()
    service = factory.service("auth/verify-email", token)
    return await service.create(payload, headers=localized(language))


async def logout(factory: RestClientFactory, token: str) -> ServiceResult:
    if not_configured(factory, "auth/logout"):
        return not_configured_error()
    service = factory.service("auth/logout", token)
    return await service.create()
