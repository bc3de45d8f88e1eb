# analysis/session.py
from __future__ import annotations
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from constants import ACTION_LOGIN, ACTION_LOGOUT
from datamodels.events import LogEvent

@dataclass(frozen=True)
class SessionIntegrityReport:
    invalid_sessions: Set[str]
    nested_logins: int = 0
    orphan_logouts: int = 0
    mismatched_logouts: int = 0
    left_open: int = 0
    total_users: int = 0
    total_events: int = 0
    open_by_user: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def total_invalid(self) -> int:
        return len(self.invalid_sessions)

    @property
    def invalid_ratio(self) -> float:
        """Percentage of processed events that correspond to an invalid session id."""
        if self.total_events == 0:
            return 0.0
        return self.total_invalid * 100.0 / self.total_events


def analyze_sessions(events: Iterable[LogEvent]) -> SessionIntegrityReport:
    """Single pass over the log with one stack of open session ids per user.

    LOGIN on a non-empty stack flags the session being pushed (nested login).
    LOGOUT on an empty stack flags an orphan; LOGOUT that does not match the
    top flags a mismatch and leaves the stack untouched. Whatever is still
    open at the end is flagged as well.
    """
    invalid: Set[str] = set()
    stacks: Dict[str, List[str]] = defaultdict(list)
    nested = orphan = mismatched = total = 0

    for ev in events:
        total += 1
        stack = stacks[ev.user_id]
        if ev.action_type == ACTION_LOGIN:
            if stack:
                invalid.add(ev.session_id)
                nested += 1
            stack.append(ev.session_id)
        elif ev.action_type == ACTION_LOGOUT:
            if not stack:
                invalid.add(ev.session_id)
                orphan += 1
            elif stack[-1] == ev.session_id:
                stack.pop()
            else:
                invalid.add(ev.session_id)
                mismatched += 1

    left_open = 0
    open_by_user: Dict[str, List[str]] = {}
    for user, stack in stacks.items():
        if stack:
            left_open += len(stack)
            invalid.update(stack)
            open_by_user[user] = list(stack)

    return SessionIntegrityReport(
        invalid_sessions=invalid,
        nested_logins=nested,
        orphan_logouts=orphan,
        mismatched_logouts=mismatched,
        left_open=left_open,
        total_users=len(stacks),
        total_events=total,
        open_by_user=open_by_user,
    )


def find_invalid_sessions(events: Iterable[LogEvent]) -> Set[str]:
    invalid: Set[str] = set()
    stacks: Dict[str, List[str]] = defaultdict(list)

    for ev in events:
        stack = stacks[ev.user_id]
        if ev.action_type == ACTION_LOGIN:
            if stack:
                invalid.add(ev.session_id)
            stack.append(ev.session_id)
        elif ev.action_type == ACTION_LOGOUT:
            if stack and stack[-1] == ev.session_id:
                stack.pop()
            else:
                invalid.add(ev.session_id)

    for stack in stacks.values():
        invalid.update(stack)
    return invalid


def users_with_most_invalid_sessions(events: List[LogEvent], top_n: int) -> Dict[str, int]:
    """Rank users by how many of their events belong to an invalid session id."""
    if top_n <= 0:
        return {}
    invalid = find_invalid_sessions(events)
    counts = Counter(ev.user_id for ev in events if ev.session_id in invalid)
    return dict(counts.most_common(top_n))


def invalid_sessions_by_window(events: List[LogEvent], window: int) -> Dict[int, int]:
    """Histogram of invalid-session events bucketed by ``window`` seconds, ascending."""
    if window <= 0:
        raise ValueError("window must be a positive number of seconds")
    invalid = find_invalid_sessions(events)
    buckets: Counter = Counter()
    for ev in events:
        if ev.session_id in invalid:
            buckets[(ev.timestamp // window) * window] += 1
    return dict(sorted(buckets.items()))
