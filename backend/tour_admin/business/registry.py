from typing import Dict, Optional

from tour_admin.cache.readers import ReferenceReaders
from tour_admin.services.rest import RestClientFactory

from .activities import ActivitiesBusinessLogic
from .auth import AuthBusinessLogic
from .base import BusinessLogic
from .categories import CategoriesBusinessLogic
from .cities import CitiesBusinessLogic
from .languages import LanguagesBusinessLogic
from .menus import MenusBusinessLogic
from .news import NewsBusinessLogic
from .offers import OffersBusinessLogic
from .roles import RolesBusinessLogic
from .terms import TermsBusinessLogic
from .tours import ToursBusinessLogic
from .users import UsersBusinessLogic


def build_business_modules(
    factory: RestClientFactory, readers: Optional[ReferenceReaders] = None
) -> Dict[str, BusinessLogic]:
    """One dispatch module per resource, keyed by resource name."""
    return {
        "auth": AuthBusinessLogic(factory),
        "cities": CitiesBusinessLogic(factory, readers),
        "categories": CategoriesBusinessLogic(factory),
        "tours": ToursBusinessLogic(factory, readers),
        "menus": MenusBusinessLogic(factory),
        "roles": RolesBusinessLogic(factory),
        "users": UsersBusinessLogic(factory),
        "offers": OffersBusinessLogic(factory),
        "terms": TermsBusinessLogic(factory),
        "news": NewsBusinessLogic(factory),
        "activities": ActivitiesBusinessLogic(factory),
        "languages": LanguagesBusinessLogic(factory),
    }
