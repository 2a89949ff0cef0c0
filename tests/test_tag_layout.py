"""Tests for the greedy name-tag layout."""

import itertools
import random

import pytest

from config.settings import TAG_BASE_OFFSET, TAG_HALF_HEIGHT, TAG_PUSH_STEP
from core.curve_sampler import CurveSampler
from core.tag_layout import (LayoutInput, TagRect, estimate_half_width, overlaps,
                             resolve_overlaps)


def _rects(tags, offsets):
    return [
        TagRect(index=i, x=t.x, y=t.curve_y, half_width=estimate_half_width(t.name_length),
                half_height=TAG_HALF_HEIGHT, offset=o)
        for i, (t, o) in enumerate(zip(tags, offsets))
    ]


def _random_tags(rng, count):
    sampler = CurveSampler.shared()
    tags = []
    for i in range(count):
        x, y = sampler.snap((rng.uniform(0.0, 1.0), 0.0))
        tags.append(LayoutInput(index=i, x=x, curve_y=y, name_length=rng.randint(1, 20)))
    return tags


def test_estimate_half_width_caps_name_length():
    assert estimate_half_width(0) == pytest.approx(0.01)
    assert estimate_half_width(4) == pytest.approx(4 * 0.009 / 2 + 0.01)
    assert estimate_half_width(12) == estimate_half_width(40)


def test_tag_rect_edges():
    rect = TagRect(index=0, x=0.5, y=0.4, half_width=0.05, half_height=0.03, offset=-0.1)
    assert rect.min_x == pytest.approx(0.45)
    assert rect.max_x == pytest.approx(0.55)
    assert rect.effective_y == pytest.approx(0.3)
    assert rect.min_y == pytest.approx(0.27)
    assert rect.max_y == pytest.approx(0.33)


def test_touching_edges_do_not_overlap():
    a = TagRect(index=0, x=0.0, y=0.0, half_width=0.5, half_height=0.5, offset=0.0)
    right = TagRect(index=1, x=1.0, y=0.0, half_width=0.5, half_height=0.5, offset=0.0)
    above = TagRect(index=2, x=0.0, y=1.0, half_width=0.5, half_height=0.5, offset=0.0)
    assert not overlaps(a, right)
    assert not overlaps(a, above)
    assert overlaps(a, TagRect(index=3, x=0.9, y=0.9, half_width=0.5, half_height=0.5, offset=0.0))


def test_empty_and_single_input():
    assert resolve_overlaps([]) == []
    assert resolve_overlaps([LayoutInput(0, 0.3, 0.5, 5)]) == [TAG_BASE_OFFSET]


def test_far_apart_tags_all_stay_above():
    tags = [LayoutInput(0, 0.05, 0.3, 3), LayoutInput(1, 0.5, 0.3, 3), LayoutInput(2, 0.95, 0.75, 3)]
    assert resolve_overlaps(tags) == [TAG_BASE_OFFSET] * 3


def test_colliding_pair_flips_second_below():
    tags = [LayoutInput(0, 0.50, 0.40, 6), LayoutInput(1, 0.52, 0.40, 6)]
    assert resolve_overlaps(tags) == [TAG_BASE_OFFSET, -TAG_BASE_OFFSET]


def test_results_map_back_to_input_order():
    # Input is not sorted by x: the leftmost tag keeps the default offset.
    tags = [LayoutInput(0, 0.52, 0.40, 6), LayoutInput(1, 0.50, 0.40, 6)]
    assert resolve_overlaps(tags) == [-TAG_BASE_OFFSET, TAG_BASE_OFFSET]


def test_three_stacked_tags_push_further_below():
    tags = [LayoutInput(i, 0.5, 0.5, 10) for i in range(3)]
    offsets = resolve_overlaps(tags)
    assert offsets[0] == TAG_BASE_OFFSET
    assert offsets[1] == -TAG_BASE_OFFSET
    assert offsets[2] == pytest.approx(-(TAG_BASE_OFFSET + 2 * TAG_PUSH_STEP))
    rects = _rects(tags, offsets)
    assert not any(overlaps(a, b) for a, b in itertools.combinations(rects, 2))


def test_offsets_are_ladder_values():
    rng = random.Random(7)
    allowed = {round(s * (TAG_BASE_OFFSET + k * TAG_PUSH_STEP), 9) for s in (1, -1) for k in range(6)}
    for _ in range(50):
        offsets = resolve_overlaps(_random_tags(rng, rng.randint(1, 10)))
        assert {round(o, 9) for o in offsets} <= allowed


@pytest.mark.parametrize("count", [2, 3, 4])
def test_small_inputs_never_overlap(count):
    rng = random.Random(1000 + count)
    for _ in range(400):
        tags = _random_tags(rng, count)
        rects = _rects(tags, resolve_overlaps(tags))
        assert not any(overlaps(a, b) for a, b in itertools.combinations(rects, 2))


def test_four_identical_tags_never_overlap():
    tags = [LayoutInput(i, 0.3, 0.6, 12) for i in range(4)]
    rects = _rects(tags, resolve_overlaps(tags))
    assert not any(overlaps(a, b) for a, b in itertools.combinations(rects, 2))


def test_layout_is_deterministic_and_idempotent():
    tags = _random_tags(random.Random(3), 8)
    assert resolve_overlaps(tags) == resolve_overlaps(list(tags))
