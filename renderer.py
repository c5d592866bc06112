from dataclasses import dataclass

from table_store import ALIGN_LEFT


@dataclass
class Cell:
    text: str
    header: bool = False
    align: str = ALIGN_LEFT
    expansion: int = 0


class CellBuffer:
    """Renderer that keeps the pushed grid in memory.

    The view only talks to this interface: reset the grid shape, set cells,
    select a cell, read/write the scroll offset and ask for a redraw. Row 0 is
    the header row. Subclasses draw the buffer on ``redraw``.
    """

    def __init__(self):
        self.cells: dict[tuple[int, int], Cell] = {}
        self.rows = 0
        self.cols = 0
        self.selection = (0, 0)
        self.row_offset = 0
        self.col_offset = 0
        self.highlight_mode = "row"  # row | column
        self.legend = ""
        self.last_line = ""
        self.last_line_error = False
        self.redraws = 0

    # ---------- grid ----------
    def reset(self, rows: int, cols: int):
        self.cells = {}
        self.rows = rows
        self.cols = cols

    def set_cell(self, row, col, text, header=False, align=ALIGN_LEFT, expansion=0):
        self.cells[(row, col)] = Cell(text, header=header, align=align, expansion=expansion)

    def cell_text(self, row, col) -> str:
        cell = self.cells.get((row, col))
        return cell.text if cell else ""

    def row_texts(self, row) -> list[str]:
        return [self.cell_text(row, c) for c in range(self.cols)]

    # ---------- selection / scrolling ----------
    def select(self, row: int, col: int):
        self.selection = (row, col)

    def get_selection(self) -> tuple[int, int]:
        return self.selection

    def get_offset(self) -> tuple[int, int]:
        return self.row_offset, self.col_offset

    def set_offset(self, row: int, col: int):
        self.row_offset = max(0, row)
        self.col_offset = max(0, col)

    def set_highlight(self, mode: str):
        self.highlight_mode = mode

    def detach(self):
        pass

    def inner_size(self) -> tuple[int, int]:
        return 0, 0

    # ---------- text lines ----------
    def set_legend(self, text: str):
        self.legend = text

    def set_last_line(self, text: str, error: bool = False):
        self.last_line = text
        self.last_line_error = error

    def redraw(self):
        self.redraws += 1
