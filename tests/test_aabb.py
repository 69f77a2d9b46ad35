from cstengine.aabb import Aabb3
from cstengine.vector import Vec3


def test_from_points():
    pts = [Vec3(1.0, 2.0, 3.0), Vec3(-1.0, 5.0, 0.0), Vec3(3.0, -1.0, 2.0)]
    aabb = Aabb3.from_points(pts)
    assert aabb.min == Vec3(-1.0, -1.0, 0.0)
    assert aabb.max == Vec3(3.0, 5.0, 3.0)


def test_from_points_accepts_generator():
    pts = [Vec3(1.0, 2.0, 3.0), Vec3(-1.0, 5.0, 0.0)]
    assert Aabb3.from_points(p for p in pts) == Aabb3.from_points(pts)


def test_from_points_empty_is_none():
    assert Aabb3.from_points([]) is None


def test_contains_point():
    aabb = Aabb3(Vec3(0.0, 0.0, 0.0), Vec3(1.0, 1.0, 1.0))
    assert aabb.contains_point(Vec3(0.5, 0.5, 0.5))
    assert not aabb.contains_point(Vec3(1.5, 0.5, 0.5))


def test_contains_boundary_points():
    aabb = Aabb3(Vec3(0.0, 0.0, 0.0), Vec3(1.0, 1.0, 1.0))
    assert aabb.contains_point(aabb.min)
    assert aabb.contains_point(aabb.max)


def test_intersects():
    a = Aabb3(Vec3(0.0, 0.0, 0.0), Vec3(2.0, 2.0, 2.0))
    b = Aabb3(Vec3(1.0, 1.0, 1.0), Vec3(3.0, 3.0, 3.0))
    c = Aabb3(Vec3(5.0, 5.0, 5.0), Vec3(6.0, 6.0, 6.0))
    assert a.intersects(b)
    assert b.intersects(a)
    assert not a.intersects(c)


def test_center_and_extents_relation():
    box = Aabb3(Vec3(-1.0, 2.0, 0.0), Vec3(3.0, 4.0, 8.0))
    half = box.extents() * 0.5
    assert box.center() - half == box.min
    assert box.center() + half == box.max
    assert box.contains_point(box.center())


def test_merge_contains_both():
    a = Aabb3(Vec3(0.0, 0.0, 0.0), Vec3(1.0, 1.0, 1.0))
    b = Aabb3(Vec3(5.0, -2.0, 0.5), Vec3(6.0, 0.0, 2.0))
    m = a.merge(b)
    for box in (a, b):
        assert m.contains_point(box.min)
        assert m.contains_point(box.max)
    assert m == b.merge(a)


def test_expand_grows_every_side():
    box = Aabb3(Vec3(0.0, 0.0, 0.0), Vec3(1.0, 1.0, 1.0))
    grown = box.expand(0.5)
    assert grown.min == box.min - Vec3.splat(0.5)
    assert grown.max == box.max + Vec3.splat(0.5)
    assert grown.contains_point(Vec3(-0.25, 1.25, 0.5))