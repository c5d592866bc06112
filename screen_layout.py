import curses

LEGEND_LINES = 1
LAST_LINES = 1


class ScreenLayout:
    """Splits the screen into the table area, the legend line and the last line."""

    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.H, self.W = stdscr.getmaxyx()
        self.table_h = max(1, self.H - LEGEND_LINES - LAST_LINES)

        self.table_win = self._window(self.table_h, 0)
        self.legend_win = self._window(LEGEND_LINES, self.table_h)
        self.status_win = self._window(LAST_LINES, self.table_h + LEGEND_LINES)

    def _window(self, height, top):
        win = curses.newwin(height, self.W, top, 0)
        # the cursor stays hidden; no pane owns it
        win.leaveok(True)
        return win
