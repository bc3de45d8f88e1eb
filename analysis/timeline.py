# analysis/timeline.py
from __future__ import annotations
from collections import Counter, deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from config import SuspiciousThresholds
from constants import (
    ACTION_COMMAND_EXEC,
    ACTION_DATA_TRANSFER,
    ACTION_FILE_ACCESS,
    ACTION_LOGOUT,
)
from datamodels.events import LogEvent

@dataclass(frozen=True)
class TimelineDetail:
    actions: List[str]
    start: int = 0
    end: int = 0
    frequency: Dict[str, int] = field(default_factory=dict)
    gaps: List[int] = field(default_factory=list)

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def total_actions(self) -> int:
        return len(self.actions)

    @property
    def mean_gap(self) -> float:
        if not self.gaps:
            return 0.0
        return sum(self.gaps) / len(self.gaps)

    @property
    def most_frequent_action(self) -> Optional[str]:
        if not self.frequency:
            return None
        return max(self.frequency.items(), key=lambda kv: kv[1])[0]


def reconstruct_timeline(events: Iterable[LogEvent], session_id: str) -> List[str]:
    """Action types of the session's events, in the order the log presents them."""
    queue: deque = deque()
    for ev in events:
        if ev.session_id == session_id:
            queue.append(ev.action_type)

    timeline: List[str] = []
    while queue:
        timeline.append(queue.popleft())
    return timeline


def analyze_timeline(events: Iterable[LogEvent], session_id: str) -> TimelineDetail:
    """Timeline with timing metadata; the session's events are ordered by timestamp first."""
    seq = sorted((ev for ev in events if ev.session_id == session_id), key=lambda e: e.timestamp)
    if not seq:
        return TimelineDetail(actions=[])

    actions = [ev.action_type for ev in seq]
    gaps = [seq[i].timestamp - seq[i - 1].timestamp for i in range(1, len(seq))]
    return TimelineDetail(
        actions=actions,
        start=seq[0].timestamp,
        end=seq[-1].timestamp,
        frequency=dict(Counter(actions)),
        gaps=gaps,
    )


def compare_sessions(events: List[LogEvent], session_ids: Iterable[str]) -> Dict[str, TimelineDetail]:
    return {sid: analyze_timeline(events, sid) for sid in session_ids}


def find_suspicious_patterns(events: List[LogEvent], session_id: str,
                             thresholds: Optional[SuspiciousThresholds] = None) -> List[str]:
    """Heuristic red flags for a single session's timeline."""
    th = thresholds or SuspiciousThresholds()
    detail = analyze_timeline(events, session_id)
    actions = detail.actions
    out: List[str] = []

    run = 0
    for action in actions:
        if action == ACTION_FILE_ACCESS:
            run += 1
            if run >= th.consecutive_file_access:
                out.append(f"Multiple consecutive {ACTION_FILE_ACCESS} (>= {th.consecutive_file_access})")
                break
        else:
            run = 0

    for prev, nxt in zip(actions, actions[1:]):
        if prev == ACTION_FILE_ACCESS and nxt == ACTION_COMMAND_EXEC:
            out.append(f"{ACTION_FILE_ACCESS} followed by {ACTION_COMMAND_EXEC}")
            break

    if ACTION_DATA_TRANSFER in actions and ACTION_LOGOUT not in actions:
        out.append(f"{ACTION_DATA_TRANSFER} without subsequent {ACTION_LOGOUT}")

    if len(actions) > th.long_session_actions:
        out.append(f"Very long session ({len(actions)} actions)")

    if len(actions) > th.fast_min_actions and detail.mean_gap < th.fast_mean_gap_seconds:
        out.append(f"Very fast actions (mean gap: {detail.mean_gap:.2f}s)")

    return out


def render_ascii_timeline(detail: TimelineDetail, session_id: str) -> str:
    lines = [
        "+" + "-" * 58 + "+",
        f"| TIMELINE - {session_id}",
        "+" + "-" * 58 + "+",
        "",
        "Time ->",
    ]
    for i, action in enumerate(detail.actions, start=1):
        if i > 1:
            lines.append("  |")
            lines.append("  v")
        lines.append(f"  [{i}] {action}")
    lines.append("")
    lines.append(f"Total duration: {detail.duration} seconds")
    lines.append(f"Total actions: {detail.total_actions}")
    return "\n".join(lines) + "\n"
