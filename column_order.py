import logging

logger = logging.getLogger(__name__)


class ColumnOrder:
    """Permutation of original column indices, in display order."""

    def __init__(self, count: int = 0):
        self.order: list[int] = []
        self.reset(count)

    def __len__(self):
        return len(self.order)

    def reset(self, count: int):
        self.order = list(range(max(0, count)))

    def original(self, position: int) -> int:
        return self.order[position]

    def swap_adjacent(self, position: int) -> bool:
        # edges are no-ops
        if position <= 0 or position >= len(self.order):
            logger.debug("swap at edge ignored: position=%d", position)
            return False
        self.order[position - 1], self.order[position] = (
            self.order[position],
            self.order[position - 1],
        )
        return True
