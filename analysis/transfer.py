# analysis/transfer.py
from __future__ import annotations
from typing import Dict, List, Sequence

from datamodels.events import LogEvent

def find_transfer_spikes(events: Sequence[LogEvent]) -> Dict[int, int]:
    """Map each event's timestamp to the timestamp of the next event moving strictly more bytes.

    Reverse scan with a monotonic stack: entries that move no more bytes than
    the current event can never answer for anything earlier, so they are
    popped; whatever remains on top is the nearest larger transfer. Events
    with no larger successor are left out of the mapping. When timestamps
    repeat, the answer recorded last during the reverse scan is kept.
    """
    spikes: Dict[int, int] = {}
    stack: List[LogEvent] = []

    for ev in reversed(events):
        while stack and stack[-1].bytes_transferred <= ev.bytes_transferred:
            stack.pop()
        if stack:
            spikes[ev.timestamp] = stack[-1].timestamp
        stack.append(ev)

    return spikes
