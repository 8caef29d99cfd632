from __future__ import annotations
from dataclasses import dataclass

from viga_isostatica.domain.labels import Direction


@dataclass(frozen=True)
class PointLoad:
    id: str
    x_m: float
    P_kN: float          # magnitud >= 0, el sentido va en direction
    direction: Direction = "down"


@dataclass(frozen=True)
class DistributedLoad:
    """
    Carga distribuida lineal entre x1 y x2.
    w1 == w2: uniforme; w1 == 0 o w2 == 0: triangular; resto: trapezoidal.
    """
    id: str
    x1_m: float
    x2_m: float
    w1_kN_m: float
    w2_kN_m: float
    direction: Direction = "down"

    @property
    def length_m(self) -> float:
        return float(self.x2_m) - float(self.x1_m)
