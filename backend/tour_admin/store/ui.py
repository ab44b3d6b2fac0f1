"""
UI slice: global loading overlay, modals, notifications, sidebar, language
"""
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict

NotificationLevel = Literal["success", "error", "warning", "info"]


class Notification(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    message: str
    level: NotificationLevel = "info"


class UIState(BaseModel):
    model_config = ConfigDict(frozen=True)

    global_loading: bool = False
    loading_message: Optional[str] = None
    modals: Dict[str, Dict[str, Any]] = {}
    notifications: List[Notification] = []
    sidebar_collapsed: bool = False
    language: str = "es"

    def view(self) -> Dict[str, Any]:
        return {
            "globalLoading": self.global_loading,
            "loadingMessage": self.loading_message,
            "modals": self.modals,
            "notifications": [n.model_dump() for n in self.notifications],
            "sidebarCollapsed": self.sidebar_collapsed,
            "language": self.language,
        }


class SetGlobalLoading(BaseModel):
    model_config = ConfigDict(frozen=True)

    loading: bool
    message: Optional[str] = None


class OpenModal(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    props: Dict[str, Any] = {}


class CloseModal(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str


class CloseAllModals(BaseModel):
    model_config = ConfigDict(frozen=True)


class Notify(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str
    level: NotificationLevel = "info"


class DismissNotification(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int


class ToggleSidebar(BaseModel):
    model_config = ConfigDict(frozen=True)


class LanguageChanged(BaseModel):
    model_config = ConfigDict(frozen=True)

    language: str


def ui_reducer(state: UIState, action: Any) -> UIState:
    if isinstance(action, SetGlobalLoading):
        return state.model_copy(
            update={"global_loading": action.loading, "loading_message": action.message if action.loading else None}
        )

    if isinstance(action, OpenModal):
        return state.model_copy(update={"modals": {**state.modals, action.name: dict(action.props)}})

    if isinstance(action, CloseModal):
        modals = {name: props for name, props in state.modals.items() if name != action.name}
        return state.model_copy(update={"modals": modals})

    if isinstance(action, CloseAllModals):
        return state.model_copy(update={"modals": {}})

    if isinstance(action, Notify):
        next_id = max((n.id for n in state.notifications), default=0) + 1
        notification = Notification(id=next_id, message=action.message, level=action.level)
        return state.model_copy(update={"notifications": [*state.notifications, notification]})

    if isinstance(action, DismissNotification):
        remaining = [n for n in state.notifications if n.id != action.id]
        return state.model_copy(update={"notifications": remaining})

    if isinstance(action, ToggleSidebar):
        return state.model_copy(update={"sidebar_collapsed": not state.sidebar_collapsed})

    if isinstance(action, LanguageChanged):
        return state.model_copy(update={"language": action.language})

    return state
