"""Side-by-side layout for sessions that overlap on one grid date.

Sessions are clustered by connected components of the overlap relation,
then each cluster is packed into the fewest columns a greedy interval
colouring allows. Every session in a cluster of ``k`` columns gets width
``1/k`` and offset ``column/k``; sessions that overlap nothing get the full
row.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List

from app.schemas.schedule import LayoutSlot, ScheduledSession

logger = logging.getLogger(__name__)


def sessions_overlap(a: ScheduledSession, b: ScheduledSession) -> bool:
    # Half-open intervals: back-to-back sessions do not overlap.
    return a.start_time < b.end_time and b.start_time < a.end_time


def _order_key(session: ScheduledSession):
    return (session.start_time, session.id, session.end_time)


class _DisjointSet:
    def __init__(self, size: int) -> None:
        self.parent = list(range(size))

    def find(self, item: int) -> int:
        while self.parent[item] != item:
            self.parent[item] = self.parent[self.parent[item]]
            item = self.parent[item]
        return item

    def union(self, a: int, b: int) -> None:
        root_a, root_b = self.find(a), self.find(b)
        if root_a == root_b:
            return
        # Lower index stays root so cluster order follows start order.
        if root_a < root_b:
            self.parent[root_b] = root_a
        else:
            self.parent[root_a] = root_b


def find_overlap_clusters(sessions: Iterable[ScheduledSession]) -> List[List[ScheduledSession]]:
    """Partition valid sessions into maximal transitively-overlapping clusters.

    Overlap is not transitive, so membership is decided by connectivity:
    A-B and B-C overlapping puts A, B and C in one cluster even when A and C
    never meet. Clusters and their members come back sorted by start time,
    then id.
    """
    ordered = sorted(sessions, key=_order_key)
    components = _DisjointSet(len(ordered))

    for i, current in enumerate(ordered):
        for j in range(i + 1, len(ordered)):
            other = ordered[j]
            if other.start_time >= current.end_time:
                # Later sessions start even later.
                break
            if sessions_overlap(current, other):
                components.union(i, j)

    members: Dict[int, List[ScheduledSession]] = defaultdict(list)
    for index, session in enumerate(ordered):
        members[components.find(index)].append(session)
    return [members[root] for root in sorted(members)]


def assign_columns(cluster: Iterable[ScheduledSession]) -> Dict[str, int]:
    """Greedy lowest-free-column assignment within one cluster.

    The number of columns used equals the peak number of simultaneously
    running sessions in the cluster.
    """
    column_ends = []
    columns: Dict[str, int] = {}
    for session in sorted(cluster, key=_order_key):
        for index, column_end in enumerate(column_ends):
            if column_end <= session.start_time:
                column_ends[index] = session.end_time
                columns[session.id] = index
                break
        else:
            columns[session.id] = len(column_ends)
            column_ends.append(session.end_time)
    return columns


def layout(sessions: Iterable[ScheduledSession]) -> Dict[str, LayoutSlot]:
    """Compute the layout slot of every session of a single date.

    Sessions with a missing or non-positive interval are not clustered; each
    gets a full-width slot flagged ``invalid`` so the presenter can mark it.
    """
    slots: Dict[str, LayoutSlot] = {}
    valid: List[ScheduledSession] = []

    for session in sessions:
        if session.has_valid_interval:
            valid.append(session)
            continue
        logger.warning(
            "Session %s has an invalid interval (%s -> %s); rendering it on its own row",
            session.id,
            session.start_time,
            session.end_time,
        )
        slots[session.id] = LayoutSlot(session_id=session.id, invalid=True)

    clusters = find_overlap_clusters(valid)
    for cluster_index, cluster in enumerate(clusters):
        columns = assign_columns(cluster)
        column_count = max(columns.values()) + 1
        for session in cluster:
            column_index = columns[session.id]
            slots[session.id] = LayoutSlot(
                session_id=session.id,
                cluster_index=cluster_index,
                column_index=column_index,
                column_count=column_count,
                width_fraction=1 / column_count,
                left_offset_fraction=column_index / column_count,
            )

    logger.debug("Laid out %d session(s) into %d cluster(s)", len(valid), len(clusters))
    return slots
