"""
Store: holds the slices, applies pure reducers, notifies subscribers
"""
import logging
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from .auth import AuthState, auth_reducer
from .reference import ReferenceState, reference_reducer
from .ui import UIState, ui_reducer

logger = logging.getLogger(__name__)

Listener = Callable[["RootState"], None]


class RootState(BaseModel):
    model_config = ConfigDict(frozen=True)

    auth: AuthState = AuthState()
    reference: ReferenceState = ReferenceState()
    ui: UIState = UIState()

    def view(self) -> Dict[str, Any]:
        return {"auth": self.auth.view(), "reference": self.reference.view(), "ui": self.ui.view()}


REDUCERS: Dict[str, Callable[[Any, Any], Any]] = {
    "auth": auth_reducer,
    "reference": reference_reducer,
    "ui": ui_reducer,
}


class Store:
    """
    Every action goes through every slice reducer; a slice that does not
    recognize the action returns its state unchanged. Listeners are only
    called when some slice actually changed.
    """

    def __init__(
        self,
        initial: Optional[RootState] = None,
        reducers: Optional[Dict[str, Callable[[Any, Any], Any]]] = None,
    ):
        self._state = initial or RootState()
        self._reducers = reducers or REDUCERS
        self._listeners: List[Listener] = []

    @property
    def state(self) -> RootState:
        return self._state

    def dispatch(self, action: Any) -> RootState:
        updates = {}
        for name, reducer in self._reducers.items():
            current = getattr(self._state, name)
            new = reducer(current, action)
            if new is not current:
                updates[name] = new
        if not updates:
            return self._state

        self._state = self._state.model_copy(update=updates)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception as e:
                logger.error(f"Store listener failed: {type(e).__name__}: {e}", exc_info=True)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
