import logging

import numpy as np

from table_errors import OutOfRange

logger = logging.getLogger(__name__)


class RowProjection:
    """Ordered list of visible original row indices.

    Visible positions are 1-based: position 0 is the header row of the grid,
    so ``to_original`` is the single place that translates a selection into a
    row of the store.
    """

    def __init__(self, store):
        self.store = store
        self.visible: list[int] = []
        self.filter = ""
        self.sorted_by: int | None = None
        self._filtered_version = None
        self.reset()

    def __len__(self):
        return len(self.visible)

    def reset(self):
        self.filter = ""
        self.sorted_by = None
        self.visible = list(range(self.store.row_count()))
        self._filtered_version = self.store.version

    # ---------- filtering ----------
    def apply_filter(self, text: str) -> list[int]:
        text = text or ""
        needle = text.lower()

        # typing more characters can only narrow the previous result
        narrowing = (
            bool(self.filter)
            and needle.startswith(self.filter.lower())
            and self._filtered_version == self.store.version
        )

        self.filter = text
        self.sorted_by = None

        if not needle:
            self.visible = list(range(self.store.row_count()))
        else:
            if narrowing:
                rows = np.array(sorted(self.visible), dtype=np.intp)
            else:
                rows = np.arange(self.store.row_count(), dtype=np.intp)
            cells = self.store.lowered()[rows]
            mask = (np.char.find(cells, needle) >= 0).any(axis=1)
            self.visible = rows[mask].tolist()

        self._filtered_version = self.store.version
        logger.debug(
            "filter %r: %d/%d rows%s",
            text,
            len(self.visible),
            self.store.row_count(),
            " (narrowed)" if narrowing else "",
        )
        return self.visible

    def row_matches(self, original: int, text: str) -> bool:
        cells = self.store.lowered()[original]
        return bool((np.char.find(cells, text.lower()) >= 0).any())

    # ---------- ordering ----------
    def sort_by(self, column: int) -> list[int]:
        values = self.store.column_values(column)
        # sorted() is stable, so ties keep their current relative order
        self.visible = sorted(self.visible, key=lambda r: values[r])
        self.sorted_by = column
        return self.visible

    def extend(self, created: int):
        """Append identity-mapped entries for rows just created in the store."""
        if created <= 0:
            return
        total = self.store.row_count()
        self.visible.extend(range(total - created, total))

    # ---------- index translation ----------
    def to_original(self, position: int) -> int:
        if position < 1 or position > len(self.visible):
            raise OutOfRange(
                f"visible position {position} out of range (1..{len(self.visible)})"
            )
        return self.visible[position - 1]
