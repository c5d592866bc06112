import curses
import logging
from typing import Callable, Optional

from column_order import ColumnOrder
from command_registry import COLUMNS_LEGEND, Command, CommandRegistry, format_legend
from keys import ENTER_KEYS, ESC, decode_key
from line_prompt import LinePrompt
from renderer import CellBuffer
from row_projection import RowProjection
from search_cursor import SearchCursor
from settings import TableSettings, load_settings
from status_bar import debug_summary, render_status
from table_errors import EmptyProjection, NotImplementedFeature, TableError
from table_store import DataStore

logger = logging.getLogger(__name__)

MODE_NORMAL = "normal"
MODE_COLUMNS = "columns"
MODE_FILTER = "filter"
MODE_SEARCH = "search"
MODE_STOPPED = "stopped"


class TableView:
    """One table: its data, its projection and the key-driven state machine.

    Selection is kept here as a (visible row position, visible column
    position) pair; row position 0 is the header, so the first data row is 1.
    The renderer only receives the result.
    """

    def __init__(self, host=None, renderer: Optional[CellBuffer] = None,
                 settings: Optional[TableSettings] = None):
        self.host = host
        self.id = 0
        self.renderer = renderer if renderer is not None else CellBuffer()
        self.settings = settings if settings is not None else load_settings()

        self.store = DataStore()
        self.columns = ColumnOrder()
        self.projection = RowProjection(self.store)
        self.searcher = SearchCursor(self.projection)
        self.commands = CommandRegistry(on_change=self._update_legend)

        self.mode = MODE_NORMAL
        self.sel_row = 0
        self.sel_col = 0
        self.last_filter = ""
        self.debug_text: Optional[str] = None

        self._selected_func: Optional[Callable[[int], None]] = None
        self._input_capture: Optional[Callable[[int, Optional[str], int], bool]] = None
        self._search_anchor = 0
        self._dirty = True

        self.filter_prompt = LinePrompt(
            "Filter: ", self._on_filter_change, self._on_filter_done
        )
        self.search_prompt = LinePrompt(
            "Search: ", self._on_search_change, self._on_search_done
        )
        self._update_legend()

    # ---------- data API ----------
    def set_columns_and_rows(self, columns, rows):
        rows = list(rows)
        old_rows = self.store.row_count()

        self.store.set_columns(columns)
        self.store.set_rows(rows)

        if len(self.columns) != self.store.column_count():
            self.columns.reset(self.store.column_count())
        if self.store.row_count() != old_rows:
            self.projection.reset()
        else:
            self.projection.apply_filter(self.projection.filter)

        self.sel_row = 1
        self.sel_col = 0
        self.renderer.set_offset(0, 0)
        self._changed()

    def set_cell(self, row: int, col: int, content: str):
        created = self.store.set_cell(row, col, content)
        self.projection.extend(created)
        self._changed()

    def set_expansion(self, col: int, weight: int):
        self.store.set_expansion(col, weight)
        self._changed()

    def set_alignment(self, col: int, align: str):
        self.store.set_alignment(col, align)
        self._changed()

    def new_command(self, trigger: str, label: str, action: Callable[[int], None]) -> Command:
        return self.commands.register(trigger, label, action)

    def set_selected_func(self, action: Optional[Callable[[int], None]]):
        self._selected_func = action

    def set_input_capture(self, fn: Optional[Callable[[int, Optional[str], int], bool]]):
        self._input_capture = fn

    def join_rows(self, start_row: int, end_row: int):
        raise NotImplementedFeature("joining rows is not implemented")

    def suspend(self, fn: Callable[[], None]):
        if self.host is None:
            return fn()
        return self.host.suspend(fn)

    def run(self):
        if self.host is None:
            raise TableError("view is not attached to a host")
        self.host.set_active(self)
        self.host.run()

    # ---------- projection reads ----------
    @property
    def visible_rows(self) -> list[int]:
        return list(self.projection.visible)

    @property
    def visible_columns(self) -> list[int]:
        return list(self.columns.order)

    @property
    def stopped(self) -> bool:
        return self.mode == MODE_STOPPED

    def selected_row(self) -> int:
        if len(self.projection) == 0:
            raise EmptyProjection("no visible rows")
        return self.projection.to_original(self.sel_row)

    # ---------- session ----------
    def start(self):
        if self.mode == MODE_STOPPED:
            self.mode = MODE_NORMAL
        self._update_legend()
        self._dirty = True

    def stop(self):
        self.mode = MODE_STOPPED
        logger.debug("view %d stopped", self.id)

    def handle_key(self, ch):
        if self.mode == MODE_STOPPED:
            return

        if self.mode == MODE_FILTER:
            self.filter_prompt.handle_key(ch)
            self.render()
            return
        if self.mode == MODE_SEARCH:
            self.search_prompt.handle_key(ch)
            self.render()
            return

        code, char = decode_key(ch)

        if self.mode == MODE_NORMAL and self._input_capture is not None:
            if not self._input_capture(code, char, self._capture_row()):
                return

        if code == ESC:
            self.stop()
            return

        if self.mode == MODE_COLUMNS:
            self._handle_columns_key(code, char)
        else:
            self._handle_normal_key(code, char)

        if not self.stopped:
            self.render()

    # ---------- normal mode ----------
    def _handle_normal_key(self, code, char):
        if code in ENTER_KEYS:
            self._fire_selected()
            return
        if code == curses.KEY_UP:
            self._move_row(-1)
            return
        if code == curses.KEY_DOWN:
            self._move_row(1)
            return
        if code == curses.KEY_PPAGE:
            self._move_row(-self._page_size())
            return
        if code == curses.KEY_NPAGE:
            self._move_row(self._page_size())
            return
        if code == curses.KEY_HOME:
            self.sel_row = 1
            self._clamp_selection()
            return
        if code == curses.KEY_END:
            self.sel_row = len(self.projection)
            self._clamp_selection()
            return
        if char is None:
            return

        if char == "q":
            self.stop()
        elif char == "c":
            self.mode = MODE_COLUMNS
            self._update_legend()
        elif char == "=":
            self._show_debug()
        elif char == "<":
            self._scroll_columns(-1)
        elif char == ">":
            self._scroll_columns(1)
        elif char == "/":
            self._start_search()
        elif char == "n":
            pos = self.searcher.find_next(self.sel_row)
            if pos is not None:
                self.sel_row = pos
        elif char == "f":
            self._start_filter()
        else:
            self._dispatch(char)

    def _dispatch(self, char):
        if self.commands.find(char) is None:
            return
        if len(self.projection) == 0:
            logger.debug("command %r ignored: no visible rows", char)
            return
        if self.commands.dispatch(char, self.selected_row()):
            # the action may have written to the store
            self._changed()

    def _fire_selected(self):
        if self._selected_func is None:
            return
        if len(self.projection) == 0:
            logger.debug("selection ignored: no visible rows")
            return
        self._selected_func(self.selected_row())
        self._changed()

    def _move_row(self, delta: int):
        if len(self.projection) == 0:
            return
        self.sel_row += delta
        self._clamp_selection()

    def _page_size(self) -> int:
        _, height = self.renderer.inner_size()
        if height > 0:
            return height
        return self.settings.page_step

    def _scroll_columns(self, delta: int):
        row_off, col_off = self.renderer.get_offset()
        target = col_off + delta
        if target < 0 or target >= len(self.columns):
            logger.debug("column scroll at edge ignored: offset=%d", col_off)
            return
        self.renderer.set_offset(row_off, target)

    def _show_debug(self):
        width, height = self.renderer.inner_size()
        row_off, _ = self.renderer.get_offset()
        self.debug_text = debug_summary(
            len(self.projection), width, height, self.sel_row, row_off
        )

    # ---------- column mode ----------
    def _handle_columns_key(self, code, char):
        if code == curses.KEY_LEFT:
            self.sel_col = max(0, self.sel_col - 1)
            return
        if code == curses.KEY_RIGHT:
            self.sel_col = min(max(0, len(self.columns) - 1), self.sel_col + 1)
            return
        if char == "q":
            self.stop()
        elif char == "c":
            self.mode = MODE_NORMAL
            self._update_legend()
        elif char == "<":
            if self.columns.swap_adjacent(self.sel_col):
                self.sel_col -= 1
                self._dirty = True
        elif char == ">":
            if self.columns.swap_adjacent(self.sel_col + 1):
                self.sel_col += 1
                self._dirty = True
        elif char == "s":
            if len(self.columns) == 0:
                return
            self.projection.sort_by(self.columns.original(self.sel_col))
            self._dirty = True

    # ---------- search ----------
    def _start_search(self):
        self.debug_text = None
        self._search_anchor = self.sel_row - 1
        self.mode = MODE_SEARCH
        self.search_prompt.start()

    def _on_search_change(self, text: str):
        pos = self.searcher.search(self._search_anchor, text)
        if pos is not None:
            self.sel_row = pos
        self.search_prompt.failed = pos is None

    def _on_search_done(self, text: str):
        self.searcher.commit(text)
        self.mode = MODE_NORMAL

    # ---------- filter ----------
    def _start_filter(self):
        self.debug_text = None
        self._apply_filter("")
        self.mode = MODE_FILTER
        self.filter_prompt.start()

    def _on_filter_change(self, text: str):
        self._apply_filter(text)

    def _on_filter_done(self, text: str):
        self._apply_filter(text)
        self.last_filter = text
        self.mode = MODE_NORMAL

    def _apply_filter(self, text: str):
        self.projection.apply_filter(text)
        self._clamp_selection()
        self._dirty = True

    # ---------- helpers ----------
    def _capture_row(self) -> int:
        if len(self.projection) == 0:
            return -1
        return self.selected_row()

    def _clamp_selection(self):
        count = len(self.projection)
        if count == 0:
            self.sel_row = 0
        else:
            self.sel_row = min(max(1, self.sel_row), count)
        self.sel_col = min(max(0, self.sel_col), max(0, len(self.columns) - 1))

    def _changed(self):
        self._clamp_selection()
        self._dirty = True

    def _update_legend(self):
        if self.mode == MODE_COLUMNS:
            self.renderer.set_legend(format_legend(COLUMNS_LEGEND))
        else:
            self.renderer.set_legend(self.commands.legend_text())

    def _fill_grid(self):
        r = self.renderer
        order = self.columns.order
        visible = self.projection.visible
        r.reset(len(visible) + 1, len(order))
        for pos, col in enumerate(order):
            column = self.store.columns[col]
            r.set_cell(0, pos, column.name, header=True,
                       align=column.align, expansion=column.expansion)
            values = self.store.column_values(col)
            for j, row in enumerate(visible):
                r.set_cell(j + 1, pos, values[row],
                           align=column.align, expansion=column.expansion)

    def render(self):
        self._clamp_selection()
        if self._dirty:
            self._fill_grid()
            self._dirty = False

        r = self.renderer
        r.set_highlight("column" if self.mode == MODE_COLUMNS else "row")
        r.select(self.sel_row, self.sel_col)

        prompt = None
        failed = False
        if self.mode == MODE_FILTER:
            prompt = self.filter_prompt.text()
        elif self.mode == MODE_SEARCH:
            prompt = self.search_prompt.text()
            failed = self.search_prompt.failed
        r.set_last_line(
            render_status(
                {
                    "prompt": prompt,
                    "debug": self.debug_text,
                    "filter": self.projection.filter,
                    "visible": len(self.projection),
                    "total": self.store.row_count(),
                }
            ),
            error=failed,
        )
        r.redraw()
