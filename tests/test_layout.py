import pytest

from src.domain.services.layout import band_position, director_position, radial_position


def test_single_slot_is_centred():
    assert band_position(0, 1, 15.0) == (50.0, 15.0)


def test_band_slots_spread_left_to_right_inside_margins():
    positions = [band_position(i, 4, 80.0) for i in range(4)]
    xs = [x for x, _ in positions]

    assert xs == sorted(xs)
    assert all(10.0 < x < 90.0 for x in xs)
    assert {y for _, y in positions} == {80.0}


def test_crowded_band_staggers_odd_slots():
    ys = [band_position(i, 5, 15.0)[1] for i in range(5)]

    assert ys == [15.0, 21.0, 15.0, 21.0, 15.0]


def test_band_position_rejects_empty_band():
    with pytest.raises(ValueError):
        band_position(0, 0, 15.0)


def test_director_slots_alternate_sides():
    assert director_position(0) == (12.0, 35.0)
    assert director_position(1) == (88.0, 35.0)
    assert director_position(2) == (12.0, 60.0)
    assert director_position(3) == (88.0, 60.0)


def test_radial_positions_start_at_top():
    assert radial_position(0, 4) == (50.0, 20.0)
    assert radial_position(1, 4) == (80.0, 50.0)
    assert radial_position(2, 4) == (50.0, 80.0)


def test_layout_is_deterministic():
    assert [band_position(i, 7, 15.0) for i in range(7)] == [
        band_position(i, 7, 15.0) for i in range(7)
    ]
