import pytest

from viga_isostatica.domain.beam import Support
from viga_isostatica.domain.loads import PointLoad
from viga_isostatica.domain.labels import moment_about
from viga_isostatica.engine.equilibrium import solve_reactions, sum_loads


SUPPORTS = (Support("A", 0.0, "simple"), Support("B", 6.0, "roller"))


def test_symmetric_point_load():
    res = solve_reactions(SUPPORTS, [PointLoad("P", 3.0, 10.0, "down")])
    R_A, R_B = res.reactions
    assert R_A.support_id == "A" and R_B.support_id == "B"
    assert R_A.R_kN == pytest.approx(5.0)
    assert R_B.R_kN == pytest.approx(5.0)
    assert R_A.direction == "up" and R_B.direction == "up"
    assert R_A.kind == "vertical"


def test_asymmetric_point_load():
    res = solve_reactions(SUPPORTS, [PointLoad("P", 2.0, 12.0, "down")])
    assert res.reaction_B.R_kN == pytest.approx(4.0)
    assert res.reaction_A.R_kN == pytest.approx(8.0)


def test_upward_load_gives_downward_reactions():
    res = solve_reactions(SUPPORTS, [PointLoad("P", 3.0, 6.0, "up")])
    assert res.reaction_A.direction == "down"
    assert res.reaction_B.direction == "down"
    assert res.reaction_A.value_kN == pytest.approx(-3.0)
    assert res.reaction_B.value_kN == pytest.approx(-3.0)


def test_supports_are_ordered_by_position():
    res = solve_reactions(tuple(reversed(SUPPORTS)), [PointLoad("P", 2.0, 12.0, "down")])
    assert res.reaction_A.support_id == "A"
    assert res.reaction_B.R_kN == pytest.approx(4.0)


def test_overhang_load_pulls_support_down():
    supports = (Support("A", 1.0), Support("B", 5.0, "roller"))
    res = solve_reactions(supports, [PointLoad("P", 7.0, 4.0, "down")])
    # ΣMA: RB·4 - 4·6 = 0 => RB = 6 ; RA = 4 - 6 = -2
    assert res.reaction_B.value_kN == pytest.approx(6.0)
    assert res.reaction_A.value_kN == pytest.approx(-2.0)
    assert res.reaction_A.direction == "down"


def test_equilibrium_residuals_vanish():
    loads = [
        PointLoad("P1", 0.5, 3.0, "down"),
        PointLoad("P2", 2.2, 7.5, "up"),
        PointLoad("P3", 5.9, 11.0, "down"),
    ]
    res = solve_reactions(SUPPORTS, loads)
    F = sum_loads(loads)
    assert res.reaction_A.value_kN + res.reaction_B.value_kN == pytest.approx(F, rel=1e-6)
    assert res.residual_Fy == pytest.approx(0.0, abs=1e-9)
    assert res.residual_M_A == pytest.approx(0.0, abs=1e-9)

    # momentos respecto a B también se anulan
    M_B = sum(moment_about(p.P_kN, p.x_m - 6.0, p.direction) for p in loads)
    M_B += res.reaction_A.value_kN * (0.0 - 6.0)
    assert M_B == pytest.approx(0.0, abs=1e-9)


def test_zero_magnitude_load_is_valid():
    res = solve_reactions(SUPPORTS, [PointLoad("P0", 2.0, 0.0, "down")])
    assert res.reaction_A.R_kN == pytest.approx(0.0)
    assert res.reaction_B.R_kN == pytest.approx(0.0)


def test_coincident_supports_raise():
    with pytest.raises(ValueError):
        solve_reactions((Support("A", 3.0), Support("B", 3.0)), [PointLoad("P", 1.0, 1.0)])


def test_moment_sign_convention_down_is_negative():
    assert moment_about(10.0, 2.0, "down") == pytest.approx(-20.0)
    assert moment_about(10.0, 2.0, "up") == pytest.approx(20.0)
