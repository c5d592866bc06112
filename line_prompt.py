import curses
from typing import Callable, Optional

from keys import BACKSPACE_KEYS, CONFIRM_KEYS, decode_key


class LinePrompt:
    """Single-line text entry shown on the last line of a view.

    ``on_change`` runs after every edit with the live text; ``on_done`` runs
    once when the text is confirmed. There is no cancel: Esc confirms too.
    """

    def __init__(
        self,
        label: str,
        on_change: Callable[[str], None],
        on_done: Callable[[str], None],
    ):
        self.label = label
        self._on_change = on_change
        self._on_done = on_done
        self.active = False
        self.failed = False
        self.buffer = ""
        self.cursor = 0

    def start(self, text: str = ""):
        self.active = True
        self.failed = False
        self.buffer = text
        self.cursor = len(text)

    def text(self) -> str:
        return f"{self.label}{self.buffer}"

    def handle_key(self, ch) -> Optional[str]:
        if not self.active:
            return None
        code, char = decode_key(ch)

        if code in CONFIRM_KEYS:
            self.active = False
            self._on_done(self.buffer)
            return "done"

        if code in BACKSPACE_KEYS:
            if self.cursor > 0:
                self.buffer = self.buffer[: self.cursor - 1] + self.buffer[self.cursor :]
                self.cursor -= 1
                self._on_change(self.buffer)
            return None

        if code == curses.KEY_DC:
            if self.cursor < len(self.buffer):
                self.buffer = self.buffer[: self.cursor] + self.buffer[self.cursor + 1 :]
                self._on_change(self.buffer)
            return None

        if code == curses.KEY_LEFT:
            self.cursor = max(0, self.cursor - 1)
            return None

        if code == curses.KEY_RIGHT:
            self.cursor = min(len(self.buffer), self.cursor + 1)
            return None

        if code == curses.KEY_HOME:
            self.cursor = 0
            return None

        if code == curses.KEY_END:
            self.cursor = len(self.buffer)
            return None

        if char is not None:
            self.buffer = self.buffer[: self.cursor] + char + self.buffer[self.cursor :]
            self.cursor += 1
            self._on_change(self.buffer)
        return None
