import logging

import pytest

from viga_isostatica.domain.beam import BeamModel, Support
from viga_isostatica.domain.loads import PointLoad, DistributedLoad
from viga_isostatica.engine.diagrams import value_at
from viga_isostatica.engine.normalize import normalize_loads
from viga_isostatica.engine.solver import SolverOptions, solve


def _beam(point_loads=(), dist_loads=(), supports=None, L=6.0):
    if supports is None:
        supports = (Support("A", 0.0, "simple"), Support("B", L, "roller"))
    return BeamModel(id="V", L_m=L, supports=supports, point_loads=point_loads, dist_loads=dist_loads)


def test_symmetric_scenario():
    res = solve(_beam(point_loads=(PointLoad("P1", 3.0, 10.0, "down"),)))
    assert res.is_valid
    assert res.errors == ()

    R_A, R_B = res.reactions
    assert (R_A.R_kN, R_A.direction) == (pytest.approx(5.0), "up")
    assert (R_B.R_kN, R_B.direction) == (pytest.approx(5.0), "up")

    assert value_at(res.moment_segments, 0.0) == pytest.approx(0.0, abs=1e-9)
    assert value_at(res.moment_segments, 6.0) == pytest.approx(0.0, abs=1e-9)

    (m_max,) = res.moment_extrema
    assert m_max.kind == "maximum"
    assert m_max.x_m == pytest.approx(3.0)
    assert abs(m_max.value) == pytest.approx(15.0)


def test_asymmetric_scenario():
    res = solve(_beam(point_loads=(PointLoad("P1", 2.0, 12.0, "down"),)))
    assert res.reaction_for("B").R_kN == pytest.approx(12.0 * 2.0 / 6.0)
    assert res.reaction_for("A").R_kN == pytest.approx(8.0)


def test_distributed_load_matches_equivalent_point_load():
    dist = solve(_beam(dist_loads=(DistributedLoad("q1", 1.0, 3.0, 5.0, 5.0, "down"),)))
    point = solve(_beam(point_loads=(PointLoad("P", 2.0, 10.0, "down"),)))

    assert dist.is_valid
    eq = dist.equivalent_loads[-1]
    assert eq.id == "equiv_q1"
    assert eq.P_kN == pytest.approx(10.0)
    assert eq.x_m == pytest.approx(2.0)
    for a, b in zip(dist.reactions, point.reactions):
        assert a.R_kN == pytest.approx(b.R_kN)
        assert a.direction == b.direction


def test_equilibrium_invariant_mixed_loads():
    model = _beam(
        L=10.0,
        supports=(Support("B", 8.0, "roller"), Support("A", 2.0, "simple")),
        point_loads=(
            PointLoad("P1", 0.0, 4.0, "down"),
            PointLoad("P2", 5.0, 3.0, "up"),
            PointLoad("P3", 10.0, 6.0, "down"),
        ),
        dist_loads=(
            DistributedLoad("q1", 1.0, 4.0, 0.0, 3.0, "down"),
            DistributedLoad("q2", 6.0, 9.0, 2.0, 1.0, "down"),
        ),
    )
    res = solve(model)
    assert res.is_valid

    total = sum(p.P_kN if p.direction == "down" else -p.P_kN for p in res.equivalent_loads)
    assert sum(r.value_kN for r in res.reactions) == pytest.approx(total, rel=1e-6)
    assert res.residual_Fy == pytest.approx(0.0, abs=1e-9)
    assert res.residual_M_A == pytest.approx(0.0, abs=1e-9)
    assert value_at(res.moment_segments, 10.0) == pytest.approx(0.0, abs=1e-9)


def test_zero_magnitude_load_is_kept_but_not_reported():
    res = solve(_beam(point_loads=(PointLoad("P0", 2.0, 0.0),)))
    assert res.is_valid
    assert [p.id for p in res.equivalent_loads] == ["P0"]
    assert res.shear_critical_points == ()
    assert res.moment_critical_points == ()


def test_load_on_support_has_no_false_critical_points():
    res = solve(_beam(point_loads=(PointLoad("P", 0.0, 7.0),)))
    assert res.reaction_for("A").R_kN == pytest.approx(7.0)
    assert res.reaction_for("B").R_kN == pytest.approx(0.0)
    assert res.shear_critical_points == ()
    assert res.moment_critical_points == ()


def test_single_support_is_invalid():
    res = solve(_beam(supports=(Support("A", 0.0),), point_loads=(PointLoad("P", 3.0, 10.0),)))
    assert res.is_valid is False
    assert res.errors
    assert res.reactions == ()
    assert res.shear_segments == ()
    assert res.moment_segments == ()
    assert len(res.steps) == 1
    assert res.steps[0].result.startswith("✗")


@pytest.mark.parametrize("model", [
    _beam(supports=(Support("A", 3.0), Support("B", 3.0))),
    _beam(supports=(Support("A", 0.0), Support("B", 3.0), Support("C", 6.0))),
    _beam(supports=(Support("A", 0.0, "fixed"), Support("B", 6.0))),
    _beam(supports=(Support("A", 0.0), Support("B", 7.0))),
    _beam(dist_loads=(DistributedLoad("q", 2.0, 2.0, 1.0, 1.0),)),
    _beam(point_loads=(PointLoad("P", 3.0, -1.0),)),
    _beam(point_loads=(PointLoad("P", 3.0, 1.0, "left"),)),
    BeamModel(id="V0", L_m=0.0, supports=(Support("A", 0.0), Support("B", 0.0))),
])
def test_invalid_models_do_not_raise(model):
    res = solve(model)
    assert res.is_valid is False
    assert len(res.errors) >= 1
    assert res.reactions == ()


def test_invalid_model_is_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="viga_isostatica"):
        solve(_beam(supports=(Support("A", 0.0),)))
    assert any("inválido" in r.getMessage() for r in caplog.records)


def test_steps_are_numbered_in_order():
    res = solve(_beam(
        point_loads=(PointLoad("P1", 2.0, 12.0),),
        dist_loads=(DistributedLoad("q1", 1.0, 3.0, 5.0, 5.0),),
    ))
    assert [s.number for s in res.steps] == list(range(1, len(res.steps) + 1))
    titles = [s.title for s in res.steps]
    assert titles[0] == "Validación de la estructura"
    assert "Carga distribuida q1" in titles
    assert titles[-1] == "Verificación de equilibrio"
    assert res.steps[-1].result.startswith("✓")


def test_sampling_options():
    res = solve(_beam(point_loads=(PointLoad("P1", 3.0, 10.0),)),
                SolverOptions(shear_samples=3, moment_samples=11))
    assert all(len(s.points) == 3 for s in res.shear_segments)
    assert all(len(s.points) == 11 for s in res.moment_segments)


def test_solve_is_deterministic():
    model = _beam(point_loads=(PointLoad("P1", 2.5, 4.0),), dist_loads=(DistributedLoad("q", 0.0, 6.0, 1.0, 2.0),))
    assert solve(model) == solve(model)


def test_small_off_centre_load_reports_no_zero_at_support():
    res = solve(_beam(point_loads=(PointLoad("P1", 0.1, 0.3, "down"),)))
    assert res.is_valid
    assert [c for c in res.moment_critical_points if c.kind == "zero"] == []


def test_genuine_moment_zero_is_still_reported():
    res = solve(_beam(
        L=8.0,
        supports=(Support("A", 1.0), Support("B", 7.0, "roller")),
        point_loads=(PointLoad("P1", 0.0, 5.0), PointLoad("P2", 4.0, 10.0)),
    ))
    zeros = [c for c in res.moment_critical_points if c.kind == "zero"]
    assert len(zeros) == 1
    assert zeros[0].x_m == pytest.approx(1.0 + 5.0 / 17.5 * 3.0)
    assert zeros[0].description in res.steps[-2].result


def test_missing_load_lists_are_treated_as_empty():
    model = BeamModel(id="V", L_m=6.0,
                      supports=(Support("A", 0.0), Support("B", 6.0, "roller")),
                      point_loads=(PointLoad("P1", 3.0, 10.0),), dist_loads=None)
    assert model.dist_loads == ()
    res = solve(model)
    assert res.is_valid
    assert res.reaction_for("A").R_kN == pytest.approx(5.0)


def test_equivalent_loads_come_from_normalization():
    model = _beam(
        point_loads=(PointLoad("P1", 2.0, 12.0),),
        dist_loads=(DistributedLoad("q1", 1.0, 3.0, 5.0, 5.0), DistributedLoad("q2", 3.0, 6.0, 0.0, 4.0)),
    )
    res = solve(model)
    assert list(res.equivalent_loads) == normalize_loads(model)
    step = next(s for s in res.steps if s.title == "Carga distribuida q2")
    assert step.result == "Resultante en x = 5 m (down)"


def test_negative_terms_are_parenthesized_in_trace():
    res = solve(_beam(point_loads=(PointLoad("P1", 3.0, 6.0, "up"),)))
    step = next(s for s in res.steps if s.title == "Equilibrio de fuerzas verticales")
    assert step.calculation == "RA + (-3) - (-6) = 0"
    step = next(s for s in res.steps if s.title == "Equilibrio de momentos respecto al apoyo A")
    assert step.calculation == "RB × 6 + 18 = 0"
