from typing import Any, Dict

from fastapi.responses import JSONResponse

from tour_admin.core.exceptions import is_error


def result_status(result: Dict[str, Any], failure_status: int = 400) -> int:
    """HTTP status for a dispatch result: 200 on success, else the error's own status."""
    if not is_error(result) and result.get("success", True) is not False:
        return 200
    error = result.get("error")
    status_code = error.get("status") if isinstance(error, dict) else None
    if isinstance(status_code, int) and 400 <= status_code < 600:
        return status_code
    return failure_status


def respond(result: Dict[str, Any], failure_status: int = 400) -> JSONResponse:
    return JSONResponse(status_code=result_status(result, failure_status), content=result)
