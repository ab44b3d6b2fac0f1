"""
Helpers shared by the per-resource service modules
"""
import copy
import logging
from typing import Any, Dict, Optional

from tour_admin.core.exceptions import ErrorCode, error_result

from .rest import RestClientFactory

logger = logging.getLogger(__name__)

EMPTY_PAGINATION: Dict[str, int] = {"page": 1, "limit": 10, "total": 0, "totalPages": 0}

# (field name, (filename, content, content type)) as accepted by httpx `files=`
UploadFile = tuple[str, tuple[str, bytes, str]]


def localized(language: Optional[str], currency: Optional[str] = None) -> Dict[str, str]:
    headers = {"X-Language": language or "es"}
    if currency:
        headers["X-Currency"] = currency
    return headers


def empty_page(extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    result: Dict[str, Any] = {
        "success": False,
        "data": [],
        "pagination": copy.deepcopy(EMPTY_PAGINATION),
    }
    if extra:
        result.update(extra)
    return result


def not_configured(factory: RestClientFactory, resource: str) -> bool:
    if factory.configured:
        return False
    logger.warning(f"BACKEND_URL is not configured, skipping call for {resource}")
    return True


def not_configured_error() -> Dict[str, Any]:
    return error_result(None, "Backend not configured", ErrorCode.BACKEND_NOT_CONFIGURED)


def page_params(page: Optional[int], limit: Optional[int], **filters: Any) -> Dict[str, Any]:
    """Query parameters with empty filters dropped."""
    params: Dict[str, Any] = {"page": page or 1, "limit": limit or 10}
    for key, value in filters.items():
        if value is None or value == "":
            continue
        params[key] = str(value).lower() if isinstance(value, bool) else value
    return params
