"""
Authentication actions: password step, OTP step, registration, logout
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from tour_admin.services import auth as auth_service

from .base import BusinessLogic, FormPayload, Result, handles, model_data, to_result


class RegisterPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    password: str = Field(min_length=1)
    first_name: str = Field(alias="firstName", min_length=1)
    last_name: str = Field(alias="lastName", min_length=1)
    role: str = "user"
    terms_conditions_id: Optional[str] = Field(default=None, alias="termsConditionsId")


class AuthAction(str, Enum):
    LOGIN = "login"
    REGISTER = "register"
    REQUEST_EMAIL_VERIFICATION = "request_email_verification"
    VERIFY_EMAIL = "verify_email"
    LOGOUT = "logout"


class AuthBusinessLogic(BusinessLogic):
    Action = AuthAction

    @handles(AuthAction.LOGIN)
    async def login(self, payload: FormPayload, token: str) -> Result:
        credentials = {"email": payload.require("email"), "password": payload.raw("password")}
        return to_result(await auth_service.login_user(self.factory, credentials, self.language(payload)))

    @handles(AuthAction.REGISTER)
    async def register(self, payload: FormPayload, token: str) -> Result:
        data = RegisterPayload.model_validate(
            {
                "email": payload.text("email"),
                "password": payload.raw("password", required=False),
                "firstName": payload.text("firstName"),
                "lastName": payload.text("lastName"),
                "role": payload.text("role", "user"),
                "termsConditionsId": payload.text("termsConditionsId"),
            }
        )
        return to_result(await auth_service.register_user(self.factory, model_data(data), self.language(payload)))

    @handles(AuthAction.REQUEST_EMAIL_VERIFICATION)
    async def request_email_verification(self, payload: FormPayload, token: str) -> Result:
        data = {"email": payload.require("email")}
        result = await auth_service.request_email_verification(self.factory, data, token, self.language(payload))
        return to_result(result)

    @handles(AuthAction.VERIFY_EMAIL, requires_token=True)
    async def verify_email(self, payload: FormPayload, token: str) -> Result:
        """`token` is the pending token issued by the password step."""
        data = {"otp": payload.require("otp", "OTP code")}
        return to_result(await auth_service.verify_email(self.factory, data, token, self.language(payload)))

    @handles(AuthAction.LOGOUT, requires_token=True)
    async def logout(self, payload: FormPayload, token: str) -> Result:
        return to_result(await auth_service.logout(self.factory, token))
