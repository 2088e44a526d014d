"""Dashboard state machine.

``ServerHelperApp`` owns the active screen, the menu cursor, the backup-file
browser and the chosen restore file. The runtime loop feeds it key tokens via
``handle_key`` and, while a busy screen is active, calls
``run_pending_work`` once after that screen has been drawn.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .actions import (
    BACKUP_ROLES,
    CHECK_PACKAGE_MANAGER,
    CHECK_VPN_CLIENT,
    MENU_ITEMS,
    PACKAGE_MANAGER,
    VPN_CLIENT,
    Exit,
    InstantCheck,
    LongRunning,
    MenuItem,
    OpenBrowser,
    action_for_index,
)
from .browser import DirectoryBrowser
from .input import (
    ACTION_BACKSPACE,
    ACTION_CANCEL,
    ACTION_CONFIRM,
    ACTION_DOWN,
    ACTION_QUIT,
    ACTION_UP,
    KeyBinding,
    KeyRegistry,
    classify_key,
)
from .logging_setup import get_logger
from .operations.result import OperationResult
from .selection import SelectionCursor
from .state import FileBrowser, Installing, Menu, Restoring, Result, Screen, is_busy

NO_FILE_SELECTED_MESSAGE = "No file selected."

logger = get_logger(__name__)


@dataclass(frozen=True)
class DashboardOperations:
    """Collaborator calls the state machine may trigger.

    Each returns an ``OperationResult``; the machine routes it unchanged into
    the result screen.
    """

    check: Callable[[str], OperationResult]
    install: Callable[[str], OperationResult]
    backup_roles: Callable[[], OperationResult]
    restore_roles: Callable[[Path], OperationResult]


class ServerHelperApp:
    def __init__(
        self,
        operations: DashboardOperations,
        backup_dir: Path,
        menu_items: tuple[MenuItem, ...] = MENU_ITEMS,
    ) -> None:
        self.operations = operations
        self.backup_dir = backup_dir
        self.menu_items = menu_items
        self.menu_cursor = SelectionCursor.for_length(len(menu_items))
        self.screen: Screen = Menu()
        self.browser: DirectoryBrowser | None = None
        self.selected_file: Path | None = None
        self._registries: dict[type, KeyRegistry] = {
            Menu: KeyRegistry(
                KeyBinding((ACTION_UP,), self.menu_previous),
                KeyBinding((ACTION_DOWN,), self.menu_next),
                KeyBinding((ACTION_CONFIRM,), self.confirm_menu_selection),
                KeyBinding((ACTION_QUIT,), lambda: True),
            ),
            FileBrowser: KeyRegistry(
                KeyBinding((ACTION_UP,), self.browser_previous),
                KeyBinding((ACTION_DOWN,), self.browser_next),
                KeyBinding((ACTION_CONFIRM,), self.confirm_browser_selection),
                KeyBinding((ACTION_BACKSPACE,), self.browser_parent),
                KeyBinding((ACTION_CANCEL, ACTION_QUIT), self.return_to_menu),
            ),
            Result: KeyRegistry(
                KeyBinding((ACTION_CONFIRM, ACTION_CANCEL, ACTION_QUIT), self.return_to_menu),
            ),
        }

    # -- input -----------------------------------------------------------

    def handle_key(self, key: str) -> bool:
        """Apply one key token to the active screen.

        Returns ``True`` when the dashboard should exit. Busy screens have no
        bindings, so every key is absorbed until their work completes.
        """
        registry = self._registries.get(type(self.screen))
        if registry is None:
            return False
        return bool(registry.dispatch(classify_key(key)))

    def set_screen(self, screen: Screen) -> None:
        logger.debug("Screen %s -> %s", type(self.screen).__name__, type(screen).__name__)
        self.screen = screen

    def return_to_menu(self) -> None:
        self.set_screen(Menu())

    # -- menu ------------------------------------------------------------

    def menu_next(self) -> None:
        self.menu_cursor.select_next(len(self.menu_items))

    def menu_previous(self) -> None:
        self.menu_cursor.select_previous(len(self.menu_items))

    def confirm_menu_selection(self) -> bool:
        """Dispatch the highlighted menu action; returns ``True`` for Exit."""
        action = action_for_index(self.menu_cursor.selected, self.menu_items)
        if action is None:
            return False
        if isinstance(action, Exit):
            return True
        if isinstance(action, InstantCheck):
            self.show_result(self.run_instant(action.operation))
        elif isinstance(action, LongRunning):
            self.set_screen(Installing(action.item))
        elif isinstance(action, OpenBrowser):
            self.open_browser()
        return False

    def run_instant(self, operation: str) -> OperationResult:
        if operation == CHECK_PACKAGE_MANAGER:
            return self._call(self.operations.check, PACKAGE_MANAGER)
        if operation == CHECK_VPN_CLIENT:
            return self._call(self.operations.check, VPN_CLIENT)
        if operation == BACKUP_ROLES:
            return self._call(self.operations.backup_roles)
        return OperationResult.failed(f"Unknown operation: {operation}")

    # -- file browser ----------------------------------------------------

    def open_browser(self) -> None:
        """Rebuild the browser at the backup directory and show it."""
        self.selected_file = None
        self.browser = DirectoryBrowser(self.backup_dir)
        self.set_screen(FileBrowser())

    def browser_next(self) -> None:
        if self.browser is not None:
            self.browser.select_next()

    def browser_previous(self) -> None:
        if self.browser is not None:
            self.browser.select_previous()

    def browser_parent(self) -> None:
        if self.browser is not None:
            self.browser.go_to_parent()

    def confirm_browser_selection(self) -> None:
        if self.browser is None:
            return
        chosen = self.browser.activate_selection()
        if chosen is None:
            return
        logger.info("Selected backup file %s", chosen)
        self.selected_file = chosen
        self.set_screen(Restoring())

    # -- deferred work ---------------------------------------------------

    def has_pending_work(self) -> bool:
        return is_busy(self.screen)

    def run_pending_work(self) -> bool:
        """Run the busy screen's single blocking call and show its result.

        Returns ``False`` when nothing was pending.
        """
        screen = self.screen
        if isinstance(screen, Installing):
            result = self._call(self.operations.install, screen.item)
        elif isinstance(screen, Restoring):
            if self.selected_file is None:
                result = OperationResult.failed(NO_FILE_SELECTED_MESSAGE)
            else:
                result = self._call(self.operations.restore_roles, self.selected_file)
        else:
            return False
        self.show_result(result)
        return True

    def show_result(self, result: OperationResult) -> None:
        self.set_screen(Result(success=result.success, message=result.message))

    def _call(self, operation: Callable[..., OperationResult], *args: object) -> OperationResult:
        try:
            return operation(*args)
        except Exception as exc:
            logger.exception("Operation %s failed", getattr(operation, "__name__", operation))
            return OperationResult.failed(f"Unexpected error: {exc}")


__all__ = [
    "NO_FILE_SELECTED_MESSAGE",
    "DashboardOperations",
    "ServerHelperApp",
]
