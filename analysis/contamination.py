# analysis/contamination.py
from __future__ import annotations
from collections import deque
from typing import Dict, Iterable, List, Optional

import networkx as nx

from datamodels.events import LogEvent

def build_access_graph(events: Iterable[LogEvent]) -> nx.DiGraph:
    """Directed resource graph from consecutive accesses within each session.

    Events are grouped by session id only (not by user), each group is
    ordered by timestamp, and an edge links every resource to the next one
    touched in that session. Successor order follows first insertion.
    """
    by_session: Dict[str, List[LogEvent]] = {}
    for ev in events:
        by_session.setdefault(ev.session_id, []).append(ev)

    graph = nx.DiGraph()
    for session_events in by_session.values():
        ordered = sorted(session_events, key=lambda e: e.timestamp)
        for src, dst in zip(ordered, ordered[1:]):
            graph.add_edge(src.target_resource, dst.target_resource)
    return graph


def _walk_back(predecessor: Dict[str, Optional[str]], target: str) -> List[str]:
    path: List[str] = []
    node: Optional[str] = target
    while node is not None:
        path.append(node)
        node = predecessor[node]
    path.reverse()
    return path


def shortest_access_path(graph: nx.DiGraph, entry: str, target: str) -> Optional[List[str]]:
    """Breadth-first search; the target is recognised when it is dequeued."""
    if entry not in graph:
        return None
    if entry == target:
        return [entry]

    queue = deque([entry])
    predecessor: Dict[str, Optional[str]] = {entry: None}
    while queue:
        current = queue.popleft()
        if current == target:
            return _walk_back(predecessor, target)
        for nxt in graph.successors(current):
            if nxt not in predecessor:
                predecessor[nxt] = current
                queue.append(nxt)
    return None


def trace_contamination(events: Iterable[LogEvent], entry: str, target: str) -> Optional[List[str]]:
    """Fewest-hop resource path from ``entry`` to ``target``, or None if there is none."""
    return shortest_access_path(build_access_graph(events), entry, target)
