# datamodels/events.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

@dataclass(frozen=True)
class LogEvent:
    timestamp: int                  # epoch-like, not unique
    user_id: str
    session_id: str                 # unique only within a user's scope
    action_type: str                # LOGIN/LOGOUT/FILE_ACCESS/COMMAND_EXEC/DATA_TRANSFER/...
    target_resource: str            # path or host identifier
    severity_level: int
    bytes_transferred: int = 0

    @property
    def session_key(self) -> Tuple[str, str]:
        return (self.user_id, self.session_id)
