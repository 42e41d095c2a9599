from dataclasses import dataclass
from typing import Optional

from logging_utils import log_event
from raster_surface import ExportResult

SAVE_KEY = 's'
CLEAR_KEY = 'c'


@dataclass(frozen=True)
class CommandOutcome:
    command: Optional[str]
    handled: bool
    export: Optional[ExportResult] = None


def dispatch_key_command(engine, key: str, *, save_name: str = "Mandala") -> CommandOutcome:
    """Map a typed key onto engine commands: 's' saves, 'c' clears, others are ignored."""
    key = (key or "").lower()

    if key == SAVE_KEY:
        result = engine.save(save_name)
        return CommandOutcome(command="save", handled=True, export=result)

    if key == CLEAR_KEY:
        engine.clear()
        return CommandOutcome(command="clear", handled=True)

    if key:
        log_event("DEBUG", "Commands", "Ignored key", key=repr(key))
    return CommandOutcome(command=None, handled=False)
