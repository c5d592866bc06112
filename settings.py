import logging
from dataclasses import dataclass, fields

logger = logging.getLogger(__name__)

# default settings
MAX_CELL_WIDTH = 32
ESC_DELAY_MS = 25
PAGE_STEP = 10
SEPARATOR = "│"


@dataclass
class TableSettings:
    max_cell_width: int = MAX_CELL_WIDTH
    esc_delay_ms: int = ESC_DELAY_MS
    page_step: int = PAGE_STEP
    separator: str = SEPARATOR


def load_settings(**overrides) -> TableSettings:
    """Build settings from defaults, keeping only well-typed positive overrides."""
    cfg = TableSettings()
    known = {f.name for f in fields(TableSettings)}

    for name, value in overrides.items():
        if name not in known:
            logger.warning("ignoring unknown setting %r", name)
            continue
        default = getattr(cfg, name)
        if isinstance(default, int):
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                logger.warning("ignoring invalid %s=%r", name, value)
                continue
        elif isinstance(default, str):
            if not isinstance(value, str) or len(value) != 1:
                logger.warning("ignoring invalid %s=%r", name, value)
                continue
        setattr(cfg, name, value)

    return cfg
