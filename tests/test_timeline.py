# tests/test_timeline.py
import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from analysis.timeline import (
    analyze_timeline,
    compare_sessions,
    find_suspicious_patterns,
    reconstruct_timeline,
    render_ascii_timeline,
)
from config import SuspiciousThresholds
from datamodels.events import LogEvent


def _ev(ts, session, action, user="alice", resource="/usr/bin/sshd"):
    return LogEvent(ts, user, session, action, resource, 5, 0)


def _interleaved():
    return [
        _ev(1000, "session-1", "LOGIN"),
        _ev(1050, "session-2", "LOGIN", user="bob"),
        _ev(1100, "session-1", "COMMAND_EXEC"),
        _ev(1200, "session-1", "FILE_ACCESS"),
        _ev(1250, "session-2", "FILE_ACCESS", user="bob"),
        _ev(1300, "session-1", "DATA_TRANSFER"),
        _ev(1500, "session-1", "LOGOUT"),
    ]


def test_reconstructs_session_in_order():
    assert reconstruct_timeline(_interleaved(), "session-1") == [
        "LOGIN", "COMMAND_EXEC", "FILE_ACCESS", "DATA_TRANSFER", "LOGOUT",
    ]
    assert reconstruct_timeline(_interleaved(), "session-2") == ["LOGIN", "FILE_ACCESS"]


def test_unknown_session_yields_empty_list():
    assert reconstruct_timeline(_interleaved(), "session-X") == []
    assert reconstruct_timeline([], "session-1") == []


def test_input_order_is_trusted_not_resorted():
    events = [_ev(3, "s", "C"), _ev(1, "s", "A"), _ev(2, "s", "B")]
    assert reconstruct_timeline(events, "s") == ["C", "A", "B"]


def test_length_matches_matching_event_count():
    events = _interleaved()
    for sid in ("session-1", "session-2"):
        assert len(reconstruct_timeline(events, sid)) == sum(1 for e in events if e.session_id == sid)


def test_repeated_actions_are_kept():
    events = [_ev(i, "s", "FILE_ACCESS") for i in range(4)]
    assert reconstruct_timeline(events, "s") == ["FILE_ACCESS"] * 4


def test_idempotent():
    events = _interleaved()
    assert reconstruct_timeline(events, "session-1") == reconstruct_timeline(events, "session-1")


def test_analyze_timeline_metadata():
    detail = analyze_timeline(_interleaved(), "session-1")
    assert detail.start == 1000
    assert detail.end == 1500
    assert detail.duration == 500
    assert detail.total_actions == 5
    assert detail.gaps == [100, 100, 100, 200]
    assert detail.mean_gap == pytest.approx(125.0)
    assert detail.frequency["LOGIN"] == 1
    assert detail.most_frequent_action == "LOGIN"


def test_analyze_timeline_sorts_by_timestamp():
    events = [_ev(3, "s", "C"), _ev(1, "s", "A"), _ev(2, "s", "B")]
    assert analyze_timeline(events, "s").actions == ["A", "B", "C"]


def test_analyze_timeline_empty_session():
    detail = analyze_timeline(_interleaved(), "nope")
    assert detail.actions == []
    assert detail.duration == 0
    assert detail.mean_gap == 0.0
    assert detail.most_frequent_action is None


def test_compare_sessions_keeps_requested_order():
    result = compare_sessions(_interleaved(), ["session-2", "session-1"])
    assert list(result) == ["session-2", "session-1"]
    assert result["session-2"].total_actions == 2


def test_suspicious_patterns():
    events = [_ev(i, "s", "FILE_ACCESS") for i in range(5)]
    events.append(_ev(5, "s", "COMMAND_EXEC"))
    events.append(_ev(6, "s", "DATA_TRANSFER"))
    patterns = find_suspicious_patterns(events, "s")
    assert any("consecutive FILE_ACCESS" in p for p in patterns)
    assert any("followed by COMMAND_EXEC" in p for p in patterns)
    assert any("without subsequent LOGOUT" in p for p in patterns)
    assert not any("long session" in p for p in patterns)


def test_suspicious_patterns_use_thresholds():
    events = [_ev(i, "s", "COMMAND_EXEC") for i in range(4)]
    th = SuspiciousThresholds(long_session_actions=3, fast_min_actions=3, fast_mean_gap_seconds=2.0)
    patterns = find_suspicious_patterns(events, "s", th)
    assert any("long session (4 actions)" in p for p in patterns)
    assert any("fast actions" in p for p in patterns)


def test_clean_session_has_no_suspicious_patterns():
    events = [_ev(0, "s", "LOGIN"), _ev(10, "s", "FILE_ACCESS"), _ev(20, "s", "LOGOUT")]
    assert find_suspicious_patterns(events, "s") == []


def test_render_ascii_timeline():
    detail = analyze_timeline(_interleaved(), "session-2")
    text = render_ascii_timeline(detail, "session-2")
    assert "TIMELINE - session-2" in text
    assert "[1] LOGIN" in text and "[2] FILE_ACCESS" in text
    assert "Total duration: 200 seconds" in text
