# analysis/engine.py
from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Tuple

from analysis.alerts import prioritize_alerts
from analysis.contamination import trace_contamination
from analysis.session import SessionIntegrityReport, analyze_sessions, find_invalid_sessions
from analysis.timeline import TimelineDetail, analyze_timeline, reconstruct_timeline
from analysis.transfer import find_transfer_spikes
from datamodels.events import LogEvent
from infra.logging_setup import get_logger
from ingestion import read_log_file

@dataclass(frozen=True)
class AnalysisSummary:
    total_events: int
    invalid_sessions: Set[str]
    session_report: SessionIntegrityReport
    top_alerts: List[LogEvent]
    transfer_spikes: Dict[int, int]
    timeline: Optional[List[str]] = None
    session_id: Optional[str] = None
    contamination_path: Optional[List[str]] = None
    entry: Optional[str] = None
    target: Optional[str] = None


class ForensicAnalyzer:
    """
    Runs the forensic analyses over one loaded log:
    - session integrity (stack per user)
    - session timeline reconstruction (FIFO)
    - top-K alert prioritization (heap)
    - next-larger transfer detection (monotonic stack)
    - contamination path tracing (BFS over the access graph)

    The event tuple is never modified, so calls can be repeated freely.
    """

    def __init__(self, events: Iterable[LogEvent]):
        self.events: Tuple[LogEvent, ...] = tuple(events)
        self.logger = get_logger("engine")

    @classmethod
    def from_file(cls, path, strict: bool = False) -> "ForensicAnalyzer":
        return cls(read_log_file(path, strict=strict))

    @contextmanager
    def _timed(self, operation_name: str):
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            self.logger.debug("%s: %.4fs over %d events", operation_name, elapsed, len(self.events))

    def invalid_sessions(self) -> Set[str]:
        with self._timed("invalid_sessions"):
            result = find_invalid_sessions(self.events)
        self.logger.info("Found %d invalid sessions", len(result))
        return result

    def session_report(self) -> SessionIntegrityReport:
        with self._timed("session_report"):
            return analyze_sessions(self.events)

    def timeline(self, session_id: str) -> List[str]:
        with self._timed("timeline"):
            result = reconstruct_timeline(self.events, session_id)
        if not result:
            self.logger.info("No events for session %s", session_id)
        return result

    def timeline_detail(self, session_id: str) -> TimelineDetail:
        with self._timed("timeline_detail"):
            return analyze_timeline(self.events, session_id)

    def top_alerts(self, k: int) -> List[LogEvent]:
        with self._timed("top_alerts"):
            return prioritize_alerts(self.events, k)

    def transfer_spikes(self) -> Dict[int, int]:
        with self._timed("transfer_spikes"):
            result = find_transfer_spikes(self.events)
        self.logger.info("Found %d transfer spikes", len(result))
        return result

    def contamination_path(self, entry: str, target: str) -> Optional[List[str]]:
        with self._timed("contamination_path"):
            path = trace_contamination(self.events, entry, target)
        if path is None:
            self.logger.info("No access path from %s to %s", entry, target)
        return path

    def run_all(self, top_k: int, session_id: Optional[str] = None,
                entry: Optional[str] = None, target: Optional[str] = None) -> AnalysisSummary:
        report = self.session_report()
        timeline = self.timeline(session_id) if session_id is not None else None
        path = None
        if entry is not None and target is not None:
            path = self.contamination_path(entry, target)
        return AnalysisSummary(
            total_events=len(self.events),
            invalid_sessions=report.invalid_sessions,
            session_report=report,
            top_alerts=self.top_alerts(top_k),
            transfer_spikes=self.transfer_spikes(),
            timeline=timeline,
            session_id=session_id,
            contamination_path=path,
            entry=entry,
            target=target,
        )
