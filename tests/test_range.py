from dataclasses import FrozenInstanceError

import pytest

from nixf.range import Point, Range


def test_default_point_is_origin():
    assert Point().is_at(0, 0, 0)


def test_is_at_matches_fields():
    p = Point(7, 2, 39)
    assert p.is_at(7, 2, 39)
    assert not p.is_at(7, 2, 38)
    assert not p.is_at(2, 7, 39)


def test_points_compare_by_value():
    assert Point(1, 2, 3) == Point(1, 2, 3)
    assert not Point(1, 2, 3) == Point(1, 2, 4)


def test_point_is_immutable():
    p = Point(1, 1, 1)
    with pytest.raises(FrozenInstanceError):
        p.line = 5
    assert p.is_at(1, 1, 1)
    assert p == Point(1, 1, 1)


def test_range_at_is_empty():
    p = Point(0, 4, 4)
    r = Range.at(p)
    assert r.begin == p
    assert r.end == p
    assert r.begin == r.end


def test_range_keeps_endpoints():
    b = Point(0, 1, 1)
    e = Point(0, 4, 4)
    r = Range(b, e)
    assert r.begin.is_at(0, 1, 1)
    assert r.end.is_at(0, 4, 4)


def test_default_range_is_empty_at_origin():
    r = Range()
    assert r.begin.is_at(0, 0, 0)
    assert r.end == r.begin