"""
Action dispatch for form-driven business logic

Each module declares a closed `Action` enum and one handler per member.
`dispatch` never raises: unknown actions, missing fields and unexpected
failures all come back as `{"error": ...}` values.
"""
import json
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, ClassVar, Dict, List, Mapping, Optional

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from tour_admin.core.exceptions import ErrorCode, error_result, is_error
from tour_admin.services.common import UploadFile
from tour_admin.services.rest import RestClientFactory

logger = logging.getLogger(__name__)

Result = Dict[str, Any]
Handler = Callable[["BusinessLogic", "FormPayload", str], Awaitable[Result]]


class PayloadError(ValueError):
    """A required field is missing or malformed."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class FormPayload:
    """
    Read-only view over submitted form data

    Accepts a Starlette `FormData` (multi-dict) or a plain mapping.
    """

    def __init__(self, form: Optional[Mapping[str, Any]] = None):
        self._form = form if form is not None else {}

    def __contains__(self, key: str) -> bool:
        return key in self._form

    def _getlist(self, key: str) -> List[Any]:
        getlist = getattr(self._form, "getlist", None)
        if getlist is not None:
            return list(getlist(key))
        value = self._form.get(key)
        if value is None:
            return []
        return list(value) if isinstance(value, (list, tuple)) else [value]

    def text(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self._form.get(key)
        if value is None or not isinstance(value, (str, int, float, bool)):
            return default
        value = str(value).strip()
        return value if value else default

    def require(self, key: str, label: Optional[str] = None) -> str:
        value = self.text(key)
        if value is None:
            raise PayloadError(f"{label or key} is required", field=key)
        return value

    def raw(self, key: str, required: bool = True) -> Optional[str]:
        """Untrimmed string value, for credentials. Blank counts as missing."""
        value = self._form.get(key)
        if isinstance(value, str) and value.strip():
            return value
        if required:
            raise PayloadError(f"{key} is required", field=key)
        return None

    def integer(self, key: str, default: Optional[int] = None) -> Optional[int]:
        value = self.text(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            raise PayloadError(f"{key} must be an integer", field=key)

    def boolean(self, key: str, default: Optional[bool] = None) -> Optional[bool]:
        value = self.text(key)
        if value is None:
            return default
        lowered = value.lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
        raise PayloadError(f"{key} must be a boolean", field=key)

    def json(self, key: str, default: Any = None) -> Any:
        value = self._form.get(key)
        if value is None:
            return default
        if isinstance(value, (dict, list)):
            return value
        if not isinstance(value, str) or not value.strip():
            return default
        try:
            return json.loads(value)
        except ValueError:
            raise PayloadError(f"{key} is not valid JSON", field=key)

    def object(self, key: str) -> Dict[str, Any]:
        value = self.json(key, {})
        if not isinstance(value, dict):
            raise PayloadError(f"{key} must be an object", field=key)
        return value

    def id_list(self, key: str) -> List[str]:
        """A JSON array of ids, e.g. `roleIds=["1","2"]`. An empty array is allowed."""
        value = self.json(key)
        if value is None:
            raise PayloadError(f"{key} is required", field=key)
        if not isinstance(value, list):
            raise PayloadError(f"{key} must be a list", field=key)
        return [str(item) for item in value]

    async def files(self, key: str, field_name: Optional[str] = None) -> List[UploadFile]:
        """Collect uploads under `key` as httpx multipart tuples."""
        uploads: List[UploadFile] = []
        for item in self._getlist(key):
            if isinstance(item, tuple) and len(item) == 3:
                uploads.append((field_name or key, item))
                continue
            read = getattr(item, "read", None)
            filename = getattr(item, "filename", None)
            if read is None or not filename:
                continue
            content = await read()
            content_type = getattr(item, "content_type", None) or "application/octet-stream"
            uploads.append((field_name or key, (filename, content, content_type)))
        return uploads


def with_action(form: Optional[Mapping[str, Any]], action: str) -> Dict[str, Any]:
    """Copy of `form` with `action` set; repeated multi-dict keys become lists."""
    data: Dict[str, Any] = {}
    items = form.multi_items() if hasattr(form, "multi_items") else (form or {}).items()
    for key, value in items:
        if key in data:
            current = data[key]
            data[key] = [*current, value] if isinstance(current, list) else [current, value]
        else:
            data[key] = value
    data["action"] = action
    return data


def handles(action: Enum, requires_token: bool = False) -> Callable[[Handler], Handler]:
    """Register the decorated coroutine as the handler for `action`."""

    def decorator(func: Handler) -> Handler:
        func.__handles__ = action  # type: ignore[attr-defined]
        func.__requires_token__ = requires_token  # type: ignore[attr-defined]
        return func

    return decorator


def to_result(raw: Any) -> Result:
    """Map a backend envelope or `{error}` value to `{success, data?, pagination?, message?, error?}`."""
    if is_error(raw):
        error = raw["error"]
        if not isinstance(error, dict):
            error = {"status": None, "message": str(error)}
        # cached readers attach the empty shape (data, pagination) to their errors
        failed: Result = {"success": False, "error": error}
        for key in ("data", "pagination"):
            if key in raw:
                failed[key] = raw[key]
        return failed
    if isinstance(raw, dict) and ("data" in raw or "success" in raw):
        result: Result = {"success": bool(raw.get("success", True))}
        for key in ("data", "pagination", "message"):
            if key in raw:
                result[key] = raw[key]
        return result
    return {"success": True, "data": raw}


def _validation_message(exc: PydanticValidationError) -> str:
    first = exc.errors()[0]
    field = ".".join(str(loc) for loc in first.get("loc", ()))
    return f"{field}: {first['msg']}" if field else first["msg"]


class BusinessLogic:
    """
    Base class for the per-domain dispatch modules

    Subclasses set `Action` and decorate one coroutine per member with
    `@handles(Action.MEMBER)`. A missing or duplicated handler fails at
    class creation.
    """

    Action: ClassVar[type[Enum]]
    handlers: ClassVar[Dict[Enum, Handler]]
    token_required: ClassVar[frozenset]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        handlers: Dict[Enum, Handler] = {}
        token_required = set()
        for attr in vars(cls).values():
            action = getattr(attr, "__handles__", None)
            if action is None:
                continue
            if action in handlers:
                raise TypeError(f"{cls.__name__}: duplicate handler for {action!r}")
            handlers[action] = attr
            if getattr(attr, "__requires_token__", False):
                token_required.add(action)
        missing = [member for member in cls.Action if member not in handlers]
        if missing:
            names = ", ".join(member.value for member in missing)
            raise TypeError(f"{cls.__name__}: no handler for actions {names}")
        cls.handlers = handlers
        cls.token_required = frozenset(token_required)

    def __init__(self, factory: RestClientFactory):
        self.factory = factory

    def language(self, payload: FormPayload) -> str:
        return payload.text("language") or self.factory.default_language

    def currency(self, payload: FormPayload) -> str:
        return payload.text("currency") or self.factory.default_currency

    def parse_action(self, raw: Optional[str]) -> Optional[Enum]:
        try:
            return self.Action(raw)
        except ValueError:
            return None

    async def dispatch(self, form: Optional[Mapping[str, Any]], token: str = "") -> Result:
        payload = form if isinstance(form, FormPayload) else FormPayload(form)
        action = self.parse_action(payload.text("action"))
        if action is None:
            logger.warning(
                f"{type(self).__name__}: invalid action",
                extra={"action": payload.text("action")},
            )
            return error_result(400, "Invalid action")

        if action in self.token_required and not (token or "").strip():
            return {"success": False, "error": {"status": 401, "message": "Access token is required"}}

        handler = self.handlers[action]
        try:
            return await handler(self, payload, token or "")
        except PayloadError as e:
            return {"success": False, "error": {"status": 400, "message": e.message}}
        except PydanticValidationError as e:
            return {"success": False, "error": {"status": 400, "message": _validation_message(e)}}
        except Exception as e:
            logger.error(
                f"{type(self).__name__}.{action.value} failed: {type(e).__name__}: {e}",
                exc_info=True,
            )
            return error_result(500, "Unexpected error", ErrorCode.INTERNAL_SERVER_ERROR)


def model_data(model: BaseModel) -> Dict[str, Any]:
    """Backend JSON for a payload model: camelCase aliases, unset fields dropped."""
    return model.model_dump(by_alias=True, exclude_none=True)
