from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from viga_isostatica.domain.beam import Support
from viga_isostatica.domain.loads import PointLoad
from viga_isostatica.domain.results import Reaction
from viga_isostatica.domain.labels import direction_of, moment_about


@dataclass(frozen=True)
class EquilibriumResult:
    reaction_A: Reaction
    reaction_B: Reaction

    sum_F: float        # Σ cargas (down+)
    M_A: float          # Σ momentos de cargas respecto a A (antihorario+)
    d_AB: float         # distancia entre apoyos

    residual_Fy: float  # debería ~0
    residual_M_A: float # debería ~0

    @property
    def reactions(self) -> Tuple[Reaction, Reaction]:
        return self.reaction_A, self.reaction_B


def sum_loads(loads: Sequence[PointLoad]) -> float:
    """Resultante de cargas con convención down+ / up-."""
    return sum(
        (float(p.P_kN) if p.direction == "down" else -float(p.P_kN))
        for p in loads
    )


def moment_of_loads(loads: Sequence[PointLoad], x_ref: float) -> float:
    return sum(
        moment_about(float(p.P_kN), float(p.x_m) - float(x_ref), p.direction)
        for p in loads
    )


def solve_reactions(supports: Sequence[Support], loads: Sequence[PointLoad]) -> EquilibriumResult:
    """
    Reacciones verticales de una viga con dos apoyos.

    Ecuaciones:
      ΣM_A = 0  =>  R_B · d + M_A = 0  =>  R_B = -M_A / d
      ΣFy  = 0  =>  R_A + R_B - F = 0  =>  R_A = F - R_B
    """
    if len(supports) != 2:
        raise ValueError(f"Se requieren exactamente 2 apoyos (hay {len(supports)}).")

    sup_A, sup_B = sorted(supports, key=lambda s: float(s.x_m))
    x_A = float(sup_A.x_m)
    x_B = float(sup_B.x_m)
    d = x_B - x_A
    if d <= 0:
        raise ValueError(f"Apoyos coincidentes: {sup_A.id} y {sup_B.id} en x={x_A:g} m.")

    F = sum_loads(loads)
    M_A = moment_of_loads(loads, x_A)

    R_B = -M_A / d
    R_A = F - R_B

    # Residuales
    res_Fy = R_A + R_B - F
    res_M = M_A + R_B * d

    return EquilibriumResult(
        reaction_A=Reaction(
            support_id=sup_A.id,
            x_m=x_A,
            R_kN=abs(R_A),
            kind="vertical",
            direction=direction_of(R_A),
        ),
        reaction_B=Reaction(
            support_id=sup_B.id,
            x_m=x_B,
            R_kN=abs(R_B),
            kind="vertical",
            direction=direction_of(R_B),
        ),
        sum_F=F,
        M_A=M_A,
        d_AB=d,
        residual_Fy=res_Fy,
        residual_M_A=res_M,
    )
