import curses

from renderer import CellBuffer
from settings import MAX_CELL_WIDTH, SEPARATOR
from table_store import ALIGN_CENTER, ALIGN_LEFT, ALIGN_RIGHT


def fit_text(text: str, width: int, align: str) -> str:
    text = text.replace("\n", " ")[:width]
    if align == ALIGN_RIGHT:
        return text.rjust(width)
    if align == ALIGN_CENTER:
        return text.center(width)
    return text.ljust(width)


def spread_expansion(widths, weights, extra):
    """Share ``extra`` columns of spare width in proportion to ``weights``."""
    total = sum(weights)
    if extra <= 0 or total <= 0:
        return list(widths)
    out = list(widths)
    given = 0
    last = max(i for i, wt in enumerate(weights) if wt > 0)
    for i, wt in enumerate(weights):
        if wt <= 0:
            continue
        share = extra - given if i == last else extra * wt // total
        out[i] += share
        given += share
    return out


class GridPane(CellBuffer):
    """Curses renderer: draws the buffered grid, the legend and the last line."""

    PAIR_HEADER = 1
    PAIR_LEGEND = 2
    PAIR_ERROR = 3

    def __init__(self, max_cell_width=MAX_CELL_WIDTH, separator=SEPARATOR):
        super().__init__()
        self.max_cell_width = max_cell_width
        self.separator = separator
        self.layout = None

    def attach(self, layout):
        self.layout = layout
        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(self.PAIR_HEADER, curses.COLOR_YELLOW, curses.COLOR_BLUE)
            curses.init_pair(self.PAIR_LEGEND, curses.COLOR_YELLOW, curses.COLOR_BLUE)
            curses.init_pair(self.PAIR_ERROR, curses.COLOR_RED, -1)
        except curses.error:
            pass

    def detach(self):
        self.layout = None

    def inner_size(self):
        if self.layout is None:
            return 0, 0
        h, w = self.layout.table_win.getmaxyx()
        return w, max(0, h - 1)

    # ---------- geometry ----------
    def get_col_width(self, col):
        max_len = 1
        for row in range(self.rows):
            cell = self.cells.get((row, col))
            if cell is not None:
                max_len = max(max_len, len(cell.text))
        return min(self.max_cell_width, max_len)

    def visible_columns(self, avail_w):
        """(column, width) pairs that fit from col_offset, expansion applied."""
        if self.cols == 0:
            return []
        self.col_offset = min(self.col_offset, self.cols - 1)
        if self.highlight_mode == "column":
            self._adjust_col_offset(avail_w)

        sep = len(self.separator)
        cols, widths = [], []
        used = 0
        for c in range(self.col_offset, self.cols):
            cw = self.get_col_width(c)
            gap = sep if cols else 0
            if cols and used + gap + cw > avail_w:
                break
            cw = min(cw, max(1, avail_w - used - gap))
            cols.append(c)
            widths.append(cw)
            used += gap + cw

        weights = []
        for c in cols:
            header = self.cells.get((0, c))
            weights.append(header.expansion if header else 0)
        widths = spread_expansion(widths, weights, avail_w - used)
        return list(zip(cols, widths))

    def _adjust_col_offset(self, avail_w):
        sel_col = self.selection[1]
        if sel_col < self.col_offset:
            self.col_offset = sel_col
            return
        # slide right until the selected column fits
        while self.col_offset < sel_col:
            used = 0
            for c in range(self.col_offset, sel_col + 1):
                used += self.get_col_width(c) + (len(self.separator) if c > self.col_offset else 0)
            if used <= avail_w:
                break
            self.col_offset += 1

    def _adjust_row_offset(self, body_h):
        sel = self.selection[0] - 1
        if body_h <= 0 or sel < 0:
            self.row_offset = 0
            return
        if sel < self.row_offset:
            self.row_offset = sel
        elif sel >= self.row_offset + body_h:
            self.row_offset = sel - body_h + 1
        max_offset = max(0, self.rows - 1 - body_h)
        self.row_offset = max(0, min(self.row_offset, max_offset))

    # ---------- rendering ----------
    @staticmethod
    def _put(win, y, x, text, n, attr=0):
        try:
            win.addnstr(y, x, text, n, attr)
        except curses.error:
            pass

    def _draw_table(self, win):
        win.erase()
        h, w = win.getmaxyx()
        body_h = h - 1
        self._adjust_row_offset(body_h)
        columns = self.visible_columns(w)
        sel_row, sel_col = self.selection

        try:
            header_attr = curses.color_pair(self.PAIR_HEADER) | curses.A_BOLD
        except curses.error:
            header_attr = curses.A_BOLD

        rows = [0] + list(range(self.row_offset + 1, min(self.rows, self.row_offset + 1 + body_h)))
        for y, r in enumerate(rows):
            x = 0
            for i, (c, cw) in enumerate(columns):
                if x >= w:
                    break
                if i > 0:
                    self._put(win, y, x, self.separator, 1)
                    x += len(self.separator)
                cell = self.cells.get((r, c))
                text = fit_text(cell.text if cell else "", cw, cell.align if cell else ALIGN_LEFT)
                if r == 0:
                    attr = header_attr
                elif (self.highlight_mode == "row" and r == sel_row) or (
                    self.highlight_mode == "column" and c == sel_col
                ):
                    attr = curses.A_REVERSE
                else:
                    attr = curses.A_NORMAL
                self._put(win, y, x, text, min(cw, w - x), attr)
                x += cw
        win.refresh()

    def _draw_line(self, win, text, pair):
        win.erase()
        _, w = win.getmaxyx()
        try:
            attr = curses.color_pair(pair)
        except curses.error:
            attr = curses.A_NORMAL
        self._put(win, 0, 0, text.ljust(w), max(0, w - 1), attr)
        win.refresh()

    def redraw(self):
        super().redraw()
        if self.layout is None:
            return
        self._draw_table(self.layout.table_win)
        self._draw_line(self.layout.legend_win, self.legend, self.PAIR_LEGEND)
        self._draw_line(
            self.layout.status_win,
            self.last_line,
            self.PAIR_ERROR if self.last_line_error else 0,
        )
