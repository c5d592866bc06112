import curses
import logging
import os
from typing import Callable, Optional

from grid_pane import GridPane
from screen_layout import ScreenLayout
from settings import TableSettings, load_settings
from table_errors import TableError, ToolkitFatal
from table_view import TableView

logger = logging.getLogger(__name__)


class TableHost:
    """Owns the terminal session and the views that can be shown in it.

    Only the active view receives keys. Switching is explicit through
    ``set_active``, also from inside a command action.
    """

    def __init__(self, settings: Optional[TableSettings] = None):
        self.settings = settings if settings is not None else load_settings()
        self.views: list[TableView] = []
        self.active: Optional[TableView] = None
        self.stdscr = None
        self.layout: Optional[ScreenLayout] = None

    # ---------- views ----------
    def new_view(self) -> TableView:
        renderer = GridPane(
            max_cell_width=self.settings.max_cell_width,
            separator=self.settings.separator,
        )
        view = TableView(host=self, renderer=renderer, settings=self.settings)
        self.views.append(view)
        view.id = len(self.views) - 1
        self.set_active(view)
        return view

    def set_active(self, view: TableView):
        if view not in self.views:
            raise TableError("view does not belong to this host")
        previous = self.active
        if previous is not None and previous is not view:
            # the old view may still render once when its key handler returns
            previous.renderer.detach()
        self.active = view
        if self.layout is not None:
            view.renderer.attach(self.layout)
            view.start()
            view.render()
        logger.debug("active view: %d", view.id)

    # ---------- session ----------
    def run(self, view: Optional[TableView] = None):
        """Block in the curses loop until the active view stops."""
        if view is not None:
            self.set_active(view)
        if self.active is None:
            raise TableError("no view to run")

        # make ESC snappy
        os.environ.setdefault("ESCDELAY", str(self.settings.esc_delay_ms))
        try:
            curses.wrapper(self._main)
        except curses.error as e:
            raise ToolkitFatal(f"terminal failure: {e}") from e
        finally:
            self.stdscr = None
            self.layout = None

    def _build_layout(self):
        self.layout = ScreenLayout(self.stdscr)
        self.active.renderer.attach(self.layout)

    def _main(self, stdscr):
        self.stdscr = stdscr
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        stdscr.keypad(True)
        stdscr.clear()
        stdscr.refresh()

        self._build_layout()
        self.active.start()
        self.active.render()

        while True:
            view = self.active
            ch = stdscr.get_wch()

            if ch == curses.KEY_RESIZE:
                curses.update_lines_cols()
                self._build_layout()
                view.render()
                continue

            view.handle_key(ch)
            if view.stopped:
                break

    def suspend(self, fn: Callable[[], None]):
        """Run ``fn`` with the terminal back in line mode.

        The screen is restored when ``fn`` returns or raises; input is not
        read until then.
        """
        if self.stdscr is None:
            return fn()

        try:
            curses.def_prog_mode()
        except curses.error:
            pass
        try:
            curses.endwin()
        except curses.error:
            pass

        try:
            return fn()
        finally:
            try:
                curses.reset_prog_mode()
            except curses.error:
                pass
            try:
                self.stdscr.clear()
                self.stdscr.refresh()
            except curses.error:
                pass
            if self.active is not None:
                self.active.render()
