"""analysis package

Expose the five forensic analyses, keeping submodules (session, timeline, etc.)
importable on their own.
"""

from __future__ import annotations

from analysis.alerts import prioritize_alerts
from analysis.contamination import build_access_graph, trace_contamination
from analysis.session import analyze_sessions, find_invalid_sessions
from analysis.timeline import analyze_timeline, reconstruct_timeline
from analysis.transfer import find_transfer_spikes
from analysis.engine import AnalysisSummary, ForensicAnalyzer

__all__ = [
    "AnalysisSummary",
    "ForensicAnalyzer",
    "analyze_sessions",
    "analyze_timeline",
    "build_access_graph",
    "find_invalid_sessions",
    "find_transfer_spikes",
    "prioritize_alerts",
    "reconstruct_timeline",
    "trace_contamination",
]
