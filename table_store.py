import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from table_errors import OutOfRange

logger = logging.getLogger(__name__)

ALIGN_LEFT = "left"
ALIGN_CENTER = "center"
ALIGN_RIGHT = "right"
ALIGNMENTS = (ALIGN_LEFT, ALIGN_CENTER, ALIGN_RIGHT)


@dataclass
class Column:
    name: str
    index: int
    expansion: int = 0
    align: str = ALIGN_LEFT


class DataStore:
    """Owns the row x column matrix of strings.

    Cells live in an object-dtype DataFrame whose index and columns are the
    original row and column indices. Rows are never reordered here.
    """

    def __init__(self):
        self.columns: list[Column] = []
        self._df = pd.DataFrame()
        self._lowered: np.ndarray | None = None
        self.version = 0

    # ---------- reads ----------
    def row_count(self) -> int:
        return len(self._df.index)

    def column_count(self) -> int:
        return len(self.columns)

    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]

    def cell(self, row: int, col: int) -> str:
        self._check_col(col)
        if row < 0 or row >= self.row_count():
            raise OutOfRange(f"row {row} out of range (0..{self.row_count() - 1})")
        return self._df.iat[row, col]

    def row(self, row: int) -> list[str]:
        if row < 0 or row >= self.row_count():
            raise OutOfRange(f"row {row} out of range (0..{self.row_count() - 1})")
        return list(self._df.iloc[row])

    def column_values(self, col: int):
        self._check_col(col)
        return self._df[col].to_numpy()

    def lowered(self):
        """Lower-cased cell matrix as a numpy str array, cached per version."""
        if self._lowered is None:
            self._lowered = np.char.lower(self._df.to_numpy(dtype=str))
        return self._lowered

    # ---------- writes ----------
    def set_columns(self, names):
        old = self.columns
        columns = []
        for idx, name in enumerate(names):
            col = Column(name=str(name), index=idx)
            if idx < len(old):
                col.expansion = old[idx].expansion
                col.align = old[idx].align
            columns.append(col)
        self.columns = columns
        self._df = self._df.reindex(
            columns=range(len(columns)), fill_value=""
        ).astype(object)
        self._touch()
        logger.debug("columns set: %s", self.column_names())

    def set_rows(self, rows):
        width = self.column_count()
        data = []
        for raw in rows:
            cells = ["" if v is None else str(v) for v in list(raw)[:width]]
            cells.extend([""] * (width - len(cells)))
            data.append(cells)
        if data:
            self._df = pd.DataFrame(data, columns=range(width), dtype=object)
        else:
            self._df = pd.DataFrame(columns=range(width), dtype=object)
        self._touch()
        logger.debug("rows set: %d x %d", self.row_count(), width)

    def set_cell(self, row: int, col: int, content: str) -> int:
        """Store ``content`` at (row, col), growing the row storage if needed.

        Returns the number of rows created by the call.
        """
        self._check_col(col)
        if row < 0:
            raise OutOfRange(f"row {row} is negative")

        created = 0
        count = self.row_count()
        if row >= count:
            created = row + 1 - count
            self._df = self._df.reindex(
                index=range(row + 1), fill_value=""
            ).astype(object)
        self._df.iat[row, col] = "" if content is None else str(content)
        self._touch()
        return created

    def set_expansion(self, col: int, weight: int):
        self._check_col(col)
        if weight < 0:
            raise ValueError(f"expansion weight must be >= 0, got {weight}")
        self.columns[col].expansion = int(weight)

    def set_alignment(self, col: int, align: str):
        self._check_col(col)
        if align not in ALIGNMENTS:
            raise ValueError(f"unknown alignment {align!r}")
        self.columns[col].align = align

    # ---------- internals ----------
    def _check_col(self, col: int):
        if col < 0 or col >= self.column_count():
            raise OutOfRange(
                f"column {col} out of range (0..{self.column_count() - 1})"
            )

    def _touch(self):
        self._lowered = None
        self.version += 1
