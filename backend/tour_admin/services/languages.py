"""
Content languages known to the backend (select options)
"""
from .common import localized, not_configured
from .rest import RestClientFactory, ServiceResult


async def get_languages_dropdown(factory: RestClientFactory, language: str = "es") -> ServiceResult:
    if not_configured(factory, "languages/dropdown"):
        return {"success": False, "data": []}
    return await factory.service("languages/dropdown").get(headers=localized(language))
