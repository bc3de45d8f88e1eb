# analysis/alerts.py
from __future__ import annotations
import heapq
from typing import Iterable, List, Tuple

from datamodels.events import LogEvent

def prioritize_alerts(events: Iterable[LogEvent], k: int) -> List[LogEvent]:
    """Return up to ``k`` events, most severe first.

    Every event goes into a max-heap keyed on severity (negated for heapq);
    the insertion index breaks ties so events themselves are never compared.
    """
    if k <= 0:
        return []

    heap: List[Tuple[int, int, LogEvent]] = []
    for idx, ev in enumerate(events):
        heapq.heappush(heap, (-ev.severity_level, idx, ev))

    out: List[LogEvent] = []
    while heap and len(out) < k:
        out.append(heapq.heappop(heap)[2])
    return out
