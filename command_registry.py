import logging
from typing import Callable, Optional

from table_errors import DuplicateTrigger

logger = logging.getLogger(__name__)

# keys handled by the view itself in normal mode
RESERVED_KEYS = frozenset("q/nfc<>=")

DEFAULT_LEGEND = [
    ("q", "quit"),
    ("/", "search"),
    ("n", "next"),
    ("f", "filter"),
    ("c", "columns"),
]
COLUMNS_LEGEND = [
    ("q", "quit"),
    ("c", "back"),
    ("<", "left"),
    (">", "right"),
    ("s", "sort"),
]
LEGEND_GAP = "   "


def format_legend(pairs) -> str:
    return " " + LEGEND_GAP.join(f"{key}:{label}" for key, label in pairs)


class Command:
    def __init__(
        self,
        trigger: str,
        label: str,
        action: Callable[[int], None],
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.trigger = trigger
        self.label = label
        self.action = action
        self.enabled = True
        self._on_change = on_change

    def enable(self):
        self.enabled = True
        if self._on_change:
            self._on_change()

    def disable(self):
        self.enabled = False
        if self._on_change:
            self._on_change()

    def __repr__(self):
        state = "on" if self.enabled else "off"
        return f"Command({self.trigger!r}, {self.label!r}, {state})"


class CommandRegistry:
    """User commands keyed by trigger character, in registration order."""

    def __init__(self, on_change: Optional[Callable[[], None]] = None):
        self.commands: list[Command] = []
        self._on_change = on_change

    def register(self, trigger: str, label: str, action: Callable[[int], None]) -> Command:
        if not isinstance(trigger, str) or len(trigger) != 1:
            raise ValueError(f"trigger must be a single character, got {trigger!r}")
        if trigger in RESERVED_KEYS:
            raise DuplicateTrigger(f"{trigger!r} is a built-in key")
        if any(c.trigger == trigger for c in self.commands):
            raise DuplicateTrigger(f"{trigger!r} is already registered")

        command = Command(trigger, label, action, on_change=self._on_change)
        self.commands.append(command)
        logger.debug("registered %r", command)
        if self._on_change:
            self._on_change()
        return command

    def find(self, trigger: str) -> Optional[Command]:
        for command in self.commands:
            if command.enabled and command.trigger == trigger:
                return command
        return None

    def dispatch(self, trigger: str, row: int) -> bool:
        """Run the enabled command bound to ``trigger`` on ``row``.

        Returns True when an action ran, so the caller can refresh the
        projection the action may have changed.
        """
        command = self.find(trigger)
        if command is None:
            return False
        logger.debug("dispatch %r on row %d", command, row)
        command.action(row)
        return True

    def legend_text(self) -> str:
        pairs = list(DEFAULT_LEGEND)
        for command in self.commands:
            if command.enabled and command.label:
                pairs.append((command.trigger, command.label))
        return format_legend(pairs)
