from enum import Enum

from tour_admin.services import languages as languages_service

from .base import BusinessLogic, FormPayload, Result, handles, to_result


class LanguagesAction(str, Enum):
    DROPDOWN = "dropdown"


class LanguagesBusinessLogic(BusinessLogic):
    Action = LanguagesAction

    @handles(LanguagesAction.DROPDOWN)
    async def dropdown(self, payload: FormPayload, token: str) -> Result:
        return to_result(await languages_service.get_languages_dropdown(self.factory, self.language(payload)))
