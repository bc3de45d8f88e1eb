"""
report.py - Text and tabular renderings of forensic analysis results
"""

from typing import Dict, Iterable, List, Optional

import pandas as pd

from constants import CSV_COLUMNS
from datamodels.events import LogEvent


def path_to_text(path: Optional[List[str]]) -> str:
    if not path:
        return "(no path)"
    return " -> ".join(path)


def events_frame(events: Iterable[LogEvent]) -> pd.DataFrame:
    """Events as a DataFrame with the CSV column names, in the given order."""
    rows = [{
        "TIMESTAMP": ev.timestamp,
        "USER_ID": ev.user_id,
        "SESSION_ID": ev.session_id,
        "ACTION_TYPE": ev.action_type,
        "TARGET_RESOURCE": ev.target_resource,
        "SEVERITY_LEVEL": ev.severity_level,
        "BYTES_TRANSFERRED": ev.bytes_transferred,
    } for ev in events]
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def spikes_frame(spikes: Dict[int, int]) -> pd.DataFrame:
    df = pd.DataFrame(
        [{"Timestamp": ts, "Next Larger Transfer": nxt} for ts, nxt in spikes.items()],
        columns=["Timestamp", "Next Larger Transfer"],
    )
    return df.sort_values("Timestamp").reset_index(drop=True)


def render_session_report(report) -> str:
    lines = [
        "=== INVALID SESSIONS REPORT ===",
        "",
        "Summary:",
        f"  Events processed: {report.total_events}",
        f"  Users: {report.total_users}",
        f"  Invalid sessions: {report.total_invalid} ({report.invalid_ratio:.2f}%)",
        "",
        "Violations:",
        f"  Nested LOGINs: {report.nested_logins}",
        f"  Orphan LOGOUTs: {report.orphan_logouts}",
        f"  Mismatched LOGOUTs: {report.mismatched_logouts}",
        f"  Sessions left open: {report.left_open}",
        "",
        "Invalid session ids:",
    ]
    if not report.invalid_sessions:
        lines.append("  No invalid sessions detected.")
    else:
        lines.extend(f"  - {sid}" for sid in sorted(report.invalid_sessions))
    return "\n".join(lines) + "\n"


def render_timeline_report(detail) -> str:
    lines = [
        "=== TIMELINE ANALYSIS ===",
        "",
        "Summary:",
        f"  Start: {detail.start}",
        f"  End: {detail.end}",
        f"  Duration: {detail.duration} seconds",
        f"  Actions: {detail.total_actions}",
        "",
        "Action sequence:",
    ]
    lines.extend(f"  {i}. {action}" for i, action in enumerate(detail.actions, start=1))
    lines.append("")
    lines.append("Action frequency:")
    for action, count in sorted(detail.frequency.items(), key=lambda kv: kv[1], reverse=True):
        lines.append(f"  {action}: {count}")
    if detail.gaps:
        lines.append("")
        lines.append("Gaps between actions:")
        lines.append(f"  Mean: {detail.mean_gap:.2f} seconds")
        lines.append(f"  Min: {min(detail.gaps)} seconds")
        lines.append(f"  Max: {max(detail.gaps)} seconds")
    return "\n".join(lines) + "\n"


def render_summary(summary) -> str:
    parts = [render_session_report(summary.session_report)]

    if summary.session_id is not None:
        parts.append(f"--- Timeline for {summary.session_id} ---")
        parts.append(", ".join(summary.timeline) if summary.timeline else "(no events)")
        parts.append("")

    parts.append(f"--- Top {len(summary.top_alerts)} alerts ---")
    if summary.top_alerts:
        parts.append(events_frame(summary.top_alerts).to_string(index=False))
    parts.append("")

    parts.append(f"--- Transfer spikes: {len(summary.transfer_spikes)} ---")
    if summary.transfer_spikes:
        parts.append(spikes_frame(summary.transfer_spikes).head(5).to_string(index=False))
    parts.append("")

    if summary.entry is not None and summary.target is not None:
        parts.append(f"--- Contamination path {summary.entry} -> {summary.target} ---")
        parts.append(path_to_text(summary.contamination_path))
        parts.append("")

    return "\n".join(parts)
