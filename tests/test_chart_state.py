"""Tests for ChartState: entry lifecycle, layout refresh and status expiry."""

import random

import pytest

from config.settings import RANDOM_X_MAX, RANDOM_X_MIN, STATUS_MESSAGE_DURATION_MS, TAG_BASE_OFFSET
from core.chart_state import ChartState
from core.zones import Zone


@pytest.fixture
def published(chart_state):
    snapshots = []
    chart_state.entries_changed.connect(snapshots.append)
    return snapshots


@pytest.fixture
def statuses(chart_state):
    messages = []
    chart_state.status_message_changed.connect(messages.append)
    return messages


def test_starts_empty(chart_state):
    assert chart_state.current_entries() == []
    assert chart_state.current_status_message() is None
    assert chart_state.next_color_index == 0


def test_add_entry_places_on_curve(chart_state, sampler, published):
    entry_id = chart_state.add_entry("  Ada Lovelace ")
    assert entry_id
    [entry] = chart_state.current_entries()
    assert entry.id == entry_id
    assert entry.name == "Ada Lovelace"
    assert entry.color_index == 0
    assert RANDOM_X_MIN <= entry.x <= RANDOM_X_MAX
    assert entry.y == sampler.curve_height(entry.x)
    assert entry.tag_offset == TAG_BASE_OFFSET
    assert len(published) == 1
    assert published[0][0].id == entry_id


def test_add_entry_announces_zone_message(chart_state, statuses):
    chart_state.add_entry("Ada")
    entry = chart_state.current_entries()[0]
    assert statuses == [chart_state.message_for("Ada", entry.x)]
    assert chart_state.current_status_message() == statuses[0]


@pytest.mark.parametrize("name", ["", "   ", "\t\n", None])
def test_blank_names_are_ignored(chart_state, published, scheduler, name):
    assert chart_state.add_entry(name) is None
    assert chart_state.current_entries() == []
    assert chart_state.next_color_index == 0
    assert published == []
    assert scheduler.calls == []


def test_color_index_never_resets(chart_state):
    chart_state.add_entry("a")
    chart_state.add_entry("b")
    chart_state.clear()
    chart_state.add_entry("c")
    assert [e.color_index for e in chart_state.current_entries()] == [2]
    assert chart_state.next_color_index == 3


def test_remove_entry(chart_state, published):
    first = chart_state.add_entry("a")
    second = chart_state.add_entry("b")
    chart_state.remove_entry(first)
    assert [e.id for e in chart_state.current_entries()] == [second]
    assert [e.id for e in published[-1]] == [second]


def test_remove_unknown_id_is_a_no_op(chart_state, published):
    chart_state.add_entry("a")
    count = len(published)
    chart_state.remove_entry("missing")
    assert len(chart_state.current_entries()) == 1
    assert len(published) == count


def test_move_entry_lands_exactly_on_curve(chart_state, sampler):
    entry_id = chart_state.add_entry("a")
    for target in [(0.9, 0.9), (0.0, 0.0), (0.45, 0.3), (2.0, -1.0)]:
        chart_state.move_entry(entry_id, target, 1.6)
        entry = chart_state.entry(entry_id)
        assert entry.y == sampler.curve_height(entry.x)
        assert 0.0 <= entry.x <= 1.0


def test_move_entry_uses_nearest_curve_sample(chart_state, sampler):
    entry_id = chart_state.add_entry("a")
    chart_state.move_entry(entry_id, (0.7, 0.6))
    nearest = sampler.nearest_point((0.7, 0.6))
    assert chart_state.entry(entry_id).x == nearest.x


def test_move_entry_posts_status_for_new_zone(chart_state, statuses):
    entry_id = chart_state.add_entry("Ada")
    chart_state.move_entry(entry_id, (0.95, 0.8))
    entry = chart_state.entry(entry_id)
    assert chart_state.zone_for(entry.x) is Zone.PLATEAU_OF_SUSTAINABILITY
    assert statuses[-1] == chart_state.message_for("Ada", entry.x)


def test_move_unknown_id_is_a_no_op(chart_state, statuses):
    chart_state.move_entry("missing", (0.5, 0.5))
    assert statuses == []


def test_randomize_all_keeps_identity(chart_state, sampler):
    ids = [chart_state.add_entry(n) for n in ("a", "b", "c")]
    chart_state.randomize_all()
    entries = chart_state.current_entries()
    assert [e.id for e in entries] == ids
    assert [e.color_index for e in entries] == [0, 1, 2]
    for entry in entries:
        assert RANDOM_X_MIN <= entry.x <= RANDOM_X_MAX
        assert entry.y == sampler.curve_height(entry.x)


def test_randomize_and_clear_on_empty_chart_do_nothing(chart_state, published):
    chart_state.randomize_all()
    chart_state.clear()
    assert published == []


def test_clear_publishes_empty_list(chart_state, published):
    chart_state.add_entry("a")
    chart_state.clear()
    assert published[-1] == []


def test_snapshots_are_copies(chart_state):
    entry_id = chart_state.add_entry("a")
    snapshot = chart_state.current_entries()
    snapshot[0].x = 42.0
    snapshot.clear()
    assert chart_state.entry(entry_id).x != 42.0
    assert len(chart_state.current_entries()) == 1


def test_overlapping_entries_get_separated(chart_state):
    for name in ("alpha", "beta"):
        chart_state.add_entry(name)
    first, second = (e.id for e in chart_state.current_entries())
    chart_state.move_entry(first, (0.5, 0.3))
    chart_state.move_entry(second, (0.5, 0.3))
    offsets = sorted(e.tag_offset for e in chart_state.current_entries())
    assert offsets == [-TAG_BASE_OFFSET, TAG_BASE_OFFSET]


def test_status_expires_after_duration(chart_state, scheduler, statuses):
    chart_state.add_entry("a")
    assert scheduler.calls[0][0] == STATUS_MESSAGE_DURATION_MS
    scheduler.fire(0)
    assert chart_state.current_status_message() is None
    assert statuses[-1] == ""


def test_newer_status_is_not_cleared_by_older_timer(chart_state, scheduler):
    chart_state.add_entry("a")
    chart_state.post_status("exported")
    assert chart_state.status_generation == 2
    scheduler.fire(0)
    assert chart_state.current_status_message() == "exported"
    scheduler.fire(1)
    assert chart_state.current_status_message() is None


def test_post_status_ignores_empty_messages(chart_state, scheduler):
    chart_state.post_status("")
    assert scheduler.calls == []
    assert chart_state.status_generation == 0


def test_custom_status_duration(scheduler):
    state = ChartState(rng=random.Random(0), scheduler=scheduler, status_duration_ms=50)
    state.post_status("hi")
    assert scheduler.calls[0][0] == 50


def test_same_seed_gives_same_positions(scheduler):
    a = ChartState(rng=random.Random(9), scheduler=scheduler)
    b = ChartState(rng=random.Random(9), scheduler=scheduler)
    for state in (a, b):
        state.add_entry("x")
        state.add_entry("y")
    assert [e.x for e in a.current_entries()] == [e.x for e in b.current_entries()]


def test_relayout_all_twice_gives_identical_offsets(chart_state):
    for name in ("alpha", "beta", "gamma", "delta", "epsilon"):
        entry_id = chart_state.add_entry(name)
        chart_state.move_entry(entry_id, (0.3, 0.9))
    chart_state.relayout_all()
    first = [e.tag_offset for e in chart_state.current_entries()]
    chart_state.relayout_all()
    second = [e.tag_offset for e in chart_state.current_entries()]
    assert first == second
    assert len(set(first)) > 1
