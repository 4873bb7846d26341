import math

import pytest

from luckydraw.wheel.outcome import (
    TAU,
    normalize_angle,
    resolve_winner,
    segment_angle,
    segment_at,
)

SAMPLE_ANGLES = [
    0.0, 1e-12, -1e-12, -1e-20, 0.5, -0.5, math.pi, -math.pi, TAU, -TAU,
    3 * TAU + 0.25, -7 * TAU - 1.3, 1234.5678, -98765.4321, 1e6, -1e6,
]


@pytest.mark.parametrize("angle", SAMPLE_ANGLES)
def test_normalize_range_and_idempotence(angle):
    once = normalize_angle(angle)
    assert 0.0 <= once < TAU
    assert normalize_angle(once) == once


def test_normalize_known_values():
    assert normalize_angle(-math.pi / 2) == pytest.approx(3 * math.pi / 2)
    assert normalize_angle(TAU + 0.5) == pytest.approx(0.5)
    assert normalize_angle(TAU) == 0.0


def test_six_prizes_at_rest_picks_index_four():
    # normalize(-π/2) = 3π/2, floor((3π/2) / (π/3)) = 4
    assert resolve_winner(0.0, 6) == 4


def test_one_segment_of_rotation_shifts_winner_back_by_one():
    base = resolve_winner(0.0, 6)
    shifted = resolve_winner(math.pi / 3, 6)
    assert shifted == (base - 1) % 6 == 3


@pytest.mark.parametrize("rotation", [0.3, -1.7, 2.9, 10.01, -25.4])
@pytest.mark.parametrize("k", [-3, -1, 1, 2, 5])
def test_full_turns_do_not_change_winner(rotation, k):
    for count in (2, 5, 6, 12):
        assert resolve_winner(rotation, count) == resolve_winner(rotation + TAU * k, count)


@pytest.mark.parametrize("count", [2, 3, 5, 6, 7, 12])
def test_each_segment_owns_one_contiguous_arc(count):
    samples = 3600
    indices = [
        resolve_winner(j * TAU / samples + 1e-4, count) for j in range(samples)
    ]

    assert set(indices) == set(range(count))

    # Cyclic run count equals segment count: no index appears in two arcs
    changes = sum(1 for j in range(samples) if indices[j] != indices[j - 1])
    assert changes == count

    expected = samples / count
    for index in range(count):
        assert abs(indices.count(index) - expected) <= 1


def test_segment_at_matches_drawing_convention():
    # At rotation 0, segment i spans [i*Δ, (i+1)*Δ) in screen angles
    width = segment_angle(4)
    for i in range(4):
        assert segment_at(i * width + width / 2, 0.0, 4) == i


def test_winner_is_always_a_valid_index():
    for rotation in (-1e-15, 1e-15, -TAU + 1e-15, 7 * TAU):
        assert 0 <= resolve_winner(rotation, 6) < 6
