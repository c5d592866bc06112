import curses
import unittest

from grid_pane import GridPane, fit_text, spread_expansion


class DummyWin:
    def __init__(self, h=6, w=40):
        self._h = h
        self._w = w
        self.lines = {}
        self.attrs = {}

    def getmaxyx(self):
        return self._h, self._w

    def erase(self):
        self.lines = {}
        self.attrs = {}

    def addnstr(self, y, x, text, n, attr=0):
        text = text[:n]
        row = self.lines.get(y, "")
        row = row.ljust(x) + text + row[x + len(text):]
        self.lines[y] = row
        self.attrs[(y, x)] = attr

    def refresh(self):
        pass


class DummyLayout:
    def __init__(self, h=6, w=40):
        self.table_win = DummyWin(h, w)
        self.legend_win = DummyWin(1, w)
        self.status_win = DummyWin(1, w)


def _fill(grid, rows):
    grid.reset(len(rows), len(rows[0]))
    for r, row in enumerate(rows):
        for c, text in enumerate(row):
            grid.set_cell(r, c, text, header=(r == 0))


class GridPaneTests(unittest.TestCase):
    def _grid(self, rows, h=6, w=40, **kwargs):
        grid = GridPane(**kwargs)
        grid.layout = DummyLayout(h, w)
        _fill(grid, rows)
        return grid

    def test_fit_text_aligns(self):
        self.assertEqual(fit_text("ab", 4, "left"), "ab  ")
        self.assertEqual(fit_text("ab", 4, "right"), "  ab")
        self.assertEqual(fit_text("ab", 4, "center"), " ab ")
        self.assertEqual(fit_text("abcdef", 3, "left"), "abc")

    def test_spread_expansion_gives_remainder_to_last_weight(self):
        self.assertEqual(spread_expansion([3, 3, 3], [1, 0, 2], 10), [6, 3, 10])
        self.assertEqual(spread_expansion([3, 3], [0, 0], 10), [3, 3])
        self.assertEqual(spread_expansion([3, 3], [1, 1], 0), [3, 3])

    def test_column_width_is_capped(self):
        grid = self._grid([["h"], ["x" * 50]], max_cell_width=8)
        self.assertEqual(grid.get_col_width(0), 8)

    def test_draw_header_and_rows_with_separator(self):
        grid = self._grid([["Name", "Age"], ["Alice", "30"], ["Bob", "25"]])
        grid.select(1, 0)
        grid.redraw()
        win = grid.layout.table_win
        self.assertEqual(win.lines[0].rstrip(), "Name │Age")
        self.assertEqual(win.lines[1].rstrip(), "Alice│30")
        self.assertEqual(win.lines[2].rstrip(), "Bob  │25")
        self.assertEqual(win.attrs[(1, 0)], curses.A_REVERSE)
        self.assertEqual(win.attrs[(2, 0)], curses.A_NORMAL)

    def test_rows_scroll_to_keep_selection_visible(self):
        rows = [["n"]] + [[str(i)] for i in range(20)]
        grid = self._grid(rows, h=5)
        grid.select(10, 0)
        grid.redraw()
        win = grid.layout.table_win
        self.assertEqual(grid.row_offset, 6)
        self.assertEqual(win.lines[4].strip(), "9")

        grid.select(2, 0)
        grid.redraw()
        self.assertEqual(grid.row_offset, 1)

    def test_column_offset_skips_leading_columns(self):
        grid = self._grid([["a", "b", "c"], ["1", "2", "3"]])
        grid.set_offset(0, 1)
        grid.redraw()
        self.assertEqual(grid.layout.table_win.lines[0].rstrip(), "b│c")

    def test_column_mode_slides_offset_to_selected_column(self):
        header = [f"col{i}" for i in range(10)]
        grid = self._grid([header, header], w=20)
        grid.set_highlight("column")
        grid.select(1, 8)
        grid.redraw()
        self.assertGreater(grid.col_offset, 0)
        shown = [c for c, _ in grid.visible_columns(20)]
        self.assertIn(8, shown)

    def test_expansion_uses_spare_width(self):
        grid = self._grid([["a", "b"], ["1", "2"]], w=20)
        grid.cells[(0, 1)].expansion = 1
        widths = grid.visible_columns(20)
        self.assertEqual(widths, [(0, 1), (1, 18)])

    def test_legend_and_error_line(self):
        grid = self._grid([["a"], ["1"]])
        grid.set_legend(" q:quit")
        grid.set_last_line("Search: zz", error=True)
        grid.redraw()
        self.assertEqual(grid.layout.legend_win.lines[0].rstrip(), " q:quit")
        self.assertEqual(grid.layout.status_win.lines[0].rstrip(), "Search: zz")
        self.assertEqual(grid.inner_size(), (40, 5))


if __name__ == "__main__":
    unittest.main()
