import pytest

from viga_isostatica.domain.results import DiagramSegment
from viga_isostatica.engine.critical import extract_critical_points, find_extrema, linear_zero
from viga_isostatica.engine.diagrams import sample_linear


def _seg(x0, x1, v0, v1, n=5):
    return DiagramSegment(x_start=x0, x_end=x1, equation="", points=sample_linear(x0, x1, v0, v1, n))


def test_zero_crossing_is_interpolated():
    cps = extract_critical_points([_seg(0.0, 4.0, 6.0, -2.0)], "moment")
    zeros = [c for c in cps if c.kind == "zero"]
    assert len(zeros) == 1
    assert zeros[0].x_m == pytest.approx(3.0)
    assert zeros[0].value == 0.0
    assert zeros[0].description == "momento = 0 en x = 3 m"


def test_discontinuity_at_segment_start():
    cps = extract_critical_points([_seg(0.0, 3.0, 5.0, 5.0), _seg(3.0, 6.0, -5.0, -5.0)], "shear")
    assert [(c.kind, c.x_m, c.value) for c in cps] == [
        ("discontinuity", 0.0, 5.0),
        ("discontinuity", 3.0, -5.0),
    ]
    assert cps[1].description == "corte = -5 en x = 3 m"


def test_all_zero_segments_yield_nothing():
    assert extract_critical_points([_seg(0.0, 6.0, 0.0, 0.0)], "shear") == []


def test_touching_zero_is_not_a_crossing():
    # empieza en cero y sube: no hay cambio de signo estricto
    assert linear_zero(0.0, 3.0, 0.0, 15.0) is None
    assert linear_zero(3.0, 6.0, 15.0, 0.0) is None
    cps = extract_critical_points([_seg(0.0, 3.0, 0.0, 15.0), _seg(3.0, 6.0, 15.0, 0.0)], "moment")
    assert [(c.kind, c.x_m) for c in cps] == [("discontinuity", 3.0)]


def test_values_below_tolerance_are_ignored():
    assert extract_critical_points([_seg(0.0, 1.0, 0.0005, 0.0005)], "shear") == []


def test_extrema():
    segs = [_seg(0.0, 2.0, 0.0, 8.0), _seg(2.0, 5.0, 8.0, -4.0), _seg(5.0, 6.0, -4.0, 0.0)]
    ext = find_extrema(segs, "moment")
    assert [(c.kind, c.x_m, c.value) for c in ext] == [
        ("maximum", 2.0, 8.0),
        ("minimum", 5.0, -4.0),
    ]


def test_extrema_skip_near_zero():
    assert find_extrema([_seg(0.0, 6.0, 0.0, 0.0)], "shear") == []
    ext = find_extrema([_seg(0.0, 3.0, 0.0, 15.0), _seg(3.0, 6.0, 15.0, 0.0)], "moment")
    assert [c.kind for c in ext] == ["maximum"]


def test_rounding_noise_at_end_is_not_a_crossing():
    assert linear_zero(0.0, 6.0, 15.0, -3.12e-17) is None
    assert linear_zero(0.0, 6.0, -3.12e-17, 15.0) is None
    cps = extract_critical_points([_seg(0.1, 6.0, 0.29, -3.12e-17)], "moment")
    assert [c.kind for c in cps] == ["discontinuity"]
