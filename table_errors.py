class TableError(Exception):
    """Base class for errors raised by the table widget."""


class OutOfRange(TableError, IndexError):
    """A row, column or position is outside the valid bounds."""


class EmptyProjection(TableError):
    """Selection or search attempted while no rows are visible."""


class DuplicateTrigger(TableError):
    """A command trigger collides with a registered command or built-in key."""


class NotImplementedFeature(TableError, NotImplementedError):
    """A reserved feature that has no implementation yet."""


class ToolkitFatal(TableError):
    """The terminal layer failed and the session cannot continue."""
