"""
Admin list/detail panel state.

A panel lists one entity page by page and switches between the list and a
create or edit form. Successful saves return to the list and show a toast
for a few seconds; deletes need an explicit confirmation. The panel is UI
agnostic: it drives a PanelActions bundle and exposes plain attributes the
admin frontend renders.
"""
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional

from fastapi import HTTPException

from app.core.errors import FormValidationError
from app.core.pagination import page_count

logger = logging.getLogger(__name__)

TOAST_SECONDS = 3.0


class PanelMode(str, Enum):
    LISTING = "listing"
    CREATING = "creating"
    EDITING = "editing"


@dataclass
class PanelActions:
    """Entity operations a panel needs. No `create` means the panel is edit-only."""
    list_page: Callable[[int, int], Any]
    update: Callable[[Any, Mapping[str, Any]], Any]
    delete: Callable[[Any], None]
    create: Optional[Callable[[Mapping[str, Any]], Any]] = None
    get: Optional[Callable[[Any], Any]] = None
    validate: Optional[Callable[[Mapping[str, Any]], Dict[str, str]]] = None
    normalize: Optional[Callable[[Mapping[str, Any]], Dict[str, Any]]] = None


class AdminPanel:
    def __init__(
        self,
        actions: PanelActions,
        limit: int = 6,
        clock: Callable[[], float] = time.monotonic,
        toast_seconds: float = TOAST_SECONDS,
    ):
        self.actions = actions
        self.limit = limit
        self.clock = clock
        self.toast_seconds = toast_seconds

        self.mode = PanelMode.LISTING
        self.page = 1
        self.total = 0
        self.items: List[Any] = []
        self.selected_id: Any = None
        self.selected: Any = None
        self.pending_delete_id: Any = None
        self.errors: Dict[str, str] = {}
        self.loading = False
        self.toast_message: Optional[str] = None
        self._toast_until: Optional[float] = None

    # toast overlay

    @property
    def toast_visible(self) -> bool:
        if self._toast_until is None:
            return False
        if self.clock() >= self._toast_until:
            self._toast_until = None
            self.toast_message = None
            return False
        return True

    def _show_toast(self, message: str) -> None:
        self.toast_message = message
        self._toast_until = self.clock() + self.toast_seconds

    # listing

    @property
    def page_count(self) -> int:
        return page_count(self.total, self.limit)

    def refresh(self) -> None:
        try:
            result = self.actions.list_page(self.page, self.limit)
        except HTTPException as e:
            logger.error("Failed to load page %s: %s", self.page, e.detail)
            self.items, self.total = [], 0
            return
        self.items = list(result.items)
        self.total = result.total

    def set_page(self, page: int) -> None:
        last = max(1, self.page_count)
        self.page = min(max(1, page), last)
        self.refresh()

    # forms

    @property
    def can_create(self) -> bool:
        return self.actions.create is not None

    def start_create(self) -> None:
        if not self.can_create:
            return
        self.mode = PanelMode.CREATING
        self.selected_id = None
        self.selected = None
        self.errors = {}

    def start_edit(self, record_id: Any) -> None:
        self.mode = PanelMode.EDITING
        self.selected_id = record_id
        self.errors = {}
        self.selected = None
        if self.actions.get is not None:
            try:
                self.selected = self.actions.get(record_id)
            except HTTPException as e:
                self.errors = {"general": str(e.detail)}

    def cancel(self) -> None:
        self.mode = PanelMode.LISTING
        self.selected_id = None
        self.selected = None
        self.errors = {}

    def submit(self, form: Mapping[str, Any]) -> bool:
        """Validate and save the open form. Returns True when the panel went back to the list."""
        if self.mode == PanelMode.LISTING or self.loading:
            return False

        data = self.actions.normalize(form) if self.actions.normalize else dict(form)
        errors = self.actions.validate(data) if self.actions.validate else {}
        if errors:
            self.errors = errors
            return False

        self.loading = True
        creating = self.mode == PanelMode.CREATING
        try:
            if creating:
                self.actions.create(data)
            else:
                self.actions.update(self.selected_id, data)
        except FormValidationError as e:
            self.errors = e.errors
            return False
        except HTTPException as e:
            logger.error("Panel save failed: %s", e.detail)
            self.errors = {"general": str(e.detail)}
            return False
        finally:
            self.loading = False

        self.cancel()
        self._show_toast("Created" if creating else "Updated")
        self.refresh()
        return True

    # delete with confirmation

    @property
    def confirm_open(self) -> bool:
        return self.pending_delete_id is not None

    def request_delete(self, record_id: Any) -> None:
        self.pending_delete_id = record_id

    def cancel_delete(self) -> None:
        self.pending_delete_id = None

    def confirm_delete(self) -> bool:
        if self.pending_delete_id is None:
            return False
        record_id = self.pending_delete_id
        self.pending_delete_id = None
        try:
            self.actions.delete(record_id)
        except HTTPException as e:
            logger.error("Failed to delete %s: %s", record_id, e.detail)
            self.errors = {"general": str(e.detail)}
            return False
        if self.items and len(self.items) == 1 and self.page > 1:
            self.page -= 1
        self.refresh()
        return True
