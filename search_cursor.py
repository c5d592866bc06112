import logging

logger = logging.getLogger(__name__)


class SearchCursor:
    """Wrap-around substring search over the visible rows of a projection."""

    def __init__(self, projection):
        self.projection = projection
        self.last_text = ""

    def search(self, start: int, text: str) -> int | None:
        """Return the 1-based visible position of the first match, or None.

        ``start`` is a 0-based index into the visible rows; the scan includes
        it and wraps around once.
        """
        visible = self.projection.visible
        count = len(visible)
        if count == 0:
            logger.debug("search %r skipped: no visible rows", text)
            return None

        for i in range(count):
            idx = (start + i) % count
            if self.projection.row_matches(visible[idx], text):
                return idx + 1
        logger.debug("search %r: no match", text)
        return None

    def commit(self, text: str):
        self.last_text = text or ""

    def find_next(self, current_position: int) -> int | None:
        # position p is 1-based, so as a 0-based start it is the row after it
        return self.search(current_position, self.last_text)
