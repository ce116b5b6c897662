import pytest

from app.core.geo import calculate_distance, has_coordinates


def test_distance_to_same_point_is_zero():
    assert calculate_distance(14.5995, 120.9842, 14.5995, 120.9842) == 0


def test_distance_is_symmetric():
    a = (14.5995, 120.9842)
    b = (10.3157, 123.8854)
    assert calculate_distance(*a, *b) == calculate_distance(*b, *a)


def test_distance_one_hundredth_degree_of_latitude():
    assert calculate_distance(14.5995, 120.9842, 14.6095, 120.9842) == 1112


def test_distance_one_tenth_degree_of_latitude():
    assert calculate_distance(14.60, 120.98, 14.70, 120.98) == 11119


@pytest.mark.parametrize("point", [
    (None, 120.98),
    (14.60, None),
    (0, 120.98),
    (14.60, 0),
    (0.0, 0.0),
])
def test_distance_unknown_when_a_side_is_missing(point):
    assert calculate_distance(*point, 14.60, 120.98) is None
    assert calculate_distance(14.60, 120.98, *point) is None


def test_has_coordinates():
    assert has_coordinates(14.60, 120.98)
    assert not has_coordinates(None, None)
    assert not has_coordinates(0, 120.98)
