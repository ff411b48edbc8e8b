import itertools
import logging
from datetime import datetime

import pytest

from app.schemas.schedule import ScheduledSession
from app.services.overlap_layout import assign_columns, find_overlap_clusters, layout, sessions_overlap


def _at(hhmm: str) -> str:
    return f"2026-10-14T{hhmm}:00"


def _session(session_id: str, start: str, end: str) -> ScheduledSession:
    return ScheduledSession(id=session_id, date="2026-10-14", start_time=_at(start), end_time=_at(end))


def _active_at(sessions, instant: datetime):
    return [s for s in sessions if s.has_valid_interval and s.start_time <= instant < s.end_time]


def _assert_no_horizontal_collisions(sessions, slots):
    """Sessions running at the same instant never share horizontal space."""
    for probe in sessions:
        if not probe.has_valid_interval:
            continue
        active = sorted(
            (slots[s.id] for s in _active_at(sessions, probe.start_time)),
            key=lambda slot: slot.left_offset_fraction,
        )
        for slot in active:
            assert 0 <= slot.left_offset_fraction
            assert slot.left_offset_fraction + slot.width_fraction <= 1 + 1e-9
        for left, right in zip(active, active[1:]):
            assert left.left_offset_fraction + left.width_fraction <= right.left_offset_fraction + 1e-9


def test_overlap_predicate_is_half_open():
    a = _session("a", "09:00", "10:00")
    assert sessions_overlap(a, _session("b", "09:59", "11:00"))
    assert not sessions_overlap(a, _session("c", "10:00", "11:00"))
    assert not sessions_overlap(_session("d", "08:00", "09:00"), a)


def test_non_overlapping_sessions_get_full_width():
    sessions = [_session("a", "09:00", "10:00"), _session("b", "13:00", "14:00")]
    slots = layout(sessions)
    for slot in slots.values():
        assert slot.width_fraction == 1
        assert slot.left_offset_fraction == 0
        assert slot.column_count == 1
        assert not slot.invalid
    assert slots["a"].cluster_index != slots["b"].cluster_index


def test_touching_sessions_do_not_overlap():
    slots = layout([_session("a", "09:00", "10:00"), _session("b", "10:00", "11:00")])
    assert slots["a"].width_fraction == 1
    assert slots["b"].width_fraction == 1


def test_overlap_chain_forms_one_cluster_with_two_columns():
    a = _session("A", "09:00", "10:00")
    b = _session("B", "09:30", "10:30")
    c = _session("C", "10:15", "11:00")

    clusters = find_overlap_clusters([c, a, b])
    assert [[s.id for s in cluster] for cluster in clusters] == [["A", "B", "C"]]

    slots = layout([a, b, c])
    assert {slot.column_count for slot in slots.values()} == {2}
    assert len({slot.cluster_index for slot in slots.values()}) == 1
    assert slots["A"].column_index == 0
    assert slots["C"].column_index == 0
    assert slots["B"].column_index == 1
    assert slots["B"].left_offset_fraction == pytest.approx(0.5)
    assert all(slot.width_fraction == pytest.approx(0.5) for slot in slots.values())
    _assert_no_horizontal_collisions([a, b, c], slots)


def test_three_simultaneous_sessions_split_the_row_in_thirds():
    sessions = [_session(sid, "09:00", "10:00") for sid in ("c", "a", "b")]
    slots = layout(sessions)

    assert [slots[sid].column_index for sid in ("a", "b", "c")] == [0, 1, 2]
    assert [slots[sid].left_offset_fraction for sid in ("a", "b", "c")] == pytest.approx([0, 1 / 3, 2 / 3])
    assert all(slot.width_fraction == pytest.approx(1 / 3) for slot in slots.values())


def test_column_count_is_peak_concurrency_not_cluster_size():
    sessions = [
        _session("a", "09:00", "10:00"),
        _session("b", "09:30", "10:30"),
        _session("c", "10:15", "11:00"),
        _session("d", "10:45", "11:30"),
    ]
    slots = layout(sessions)

    assert len({slot.cluster_index for slot in slots.values()}) == 1
    assert {slot.column_count for slot in slots.values()} == {2}
    assert assign_columns(sessions) == {"a": 0, "b": 1, "c": 0, "d": 1}


def test_widths_fill_the_row_at_peak_concurrency():
    sessions = [
        _session("a", "09:00", "11:00"),
        _session("b", "09:30", "10:00"),
        _session("c", "09:45", "10:30"),
        _session("e", "12:00", "13:00"),
    ]
    slots = layout(sessions)

    peak = _active_at(sessions, datetime(2026, 10, 14, 9, 50))
    assert {s.id for s in peak} == {"a", "b", "c"}
    assert sum(slots[s.id].width_fraction for s in peak) == pytest.approx(1)
    _assert_no_horizontal_collisions(sessions, slots)


def test_layout_is_independent_of_input_order():
    sessions = [
        _session("a", "09:00", "10:00"),
        _session("b", "09:00", "10:00"),
        _session("c", "09:30", "11:00"),
        _session("d", "10:00", "10:30"),
    ]
    expected = layout(sessions)
    for permutation in itertools.permutations(sessions):
        assert layout(list(permutation)) == expected


def test_identical_intervals_break_ties_by_id():
    slots = layout([_session("zeta", "09:00", "10:00"), _session("alpha", "09:00", "10:00")])
    assert slots["alpha"].column_index == 0
    assert slots["zeta"].column_index == 1


def test_invalid_session_does_not_disturb_valid_neighbours(caplog):
    valid = [_session("a", "09:00", "10:00"), _session("b", "09:30", "10:30")]
    baseline = layout(valid)

    inverted = _session("bad", "10:00", "09:15")
    zero = _session("zero", "09:45", "09:45")
    with caplog.at_level(logging.WARNING, logger="app.services.overlap_layout"):
        slots = layout(valid + [inverted, zero])

    for sid in ("a", "b"):
        assert slots[sid] == baseline[sid]
    for sid in ("bad", "zero"):
        assert slots[sid].invalid
        assert slots[sid].width_fraction == 1
        assert slots[sid].left_offset_fraction == 0
        assert slots[sid].cluster_index is None
    assert "bad" in caplog.text


def test_unparseable_timestamps_still_get_a_slot():
    broken = ScheduledSession(id="x", date="2026-10-14", start_time="not-a-time", end_time=None)
    assert broken.start_time is None

    slots = layout([broken, _session("a", "09:00", "10:00")])

    assert slots["x"].invalid
    assert slots["x"].width_fraction == 1
    assert slots["a"].width_fraction == 1
    assert not slots["a"].invalid


def test_empty_input_yields_empty_layout():
    assert layout([]) == {}


def test_clusters_partition_the_sessions():
    sessions = [
        _session("a", "08:00", "09:00"),
        _session("b", "08:30", "09:30"),
        _session("c", "11:00", "12:00"),
        _session("d", "11:30", "12:30"),
        _session("e", "12:15", "13:00"),
        _session("f", "15:00", "16:00"),
    ]
    clusters = find_overlap_clusters(sessions)

    ids = [s.id for cluster in clusters for s in cluster]
    assert sorted(ids) == sorted(s.id for s in sessions)
    assert len(ids) == len(set(ids))
    assert [[s.id for s in cluster] for cluster in clusters] == [["a", "b"], ["c", "d", "e"], ["f"]]
    for first, second in itertools.combinations(clusters, 2):
        assert not any(sessions_overlap(x, y) for x in first for y in second)


def test_timezone_offsets_are_dropped_as_wall_clock():
    aware = ScheduledSession(id="tz", start_time="2026-10-14T09:00:00+07:00", end_time="2026-10-14T10:00:00Z")
    naive = _session("n", "09:30", "10:30")

    slots = layout([aware, naive])

    assert aware.start_time.tzinfo is None
    assert slots["tz"].column_count == 2
