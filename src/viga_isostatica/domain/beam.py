from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from viga_isostatica.domain.labels import SupportKind
from viga_isostatica.domain.loads import PointLoad, DistributedLoad


@dataclass(frozen=True)
class Support:
    """
    Apoyo con posición conocida.
    kind: 'simple' y 'roller' solo toman reacción vertical; 'fixed' se modela
    pero el solver isostático lo rechaza.
    """
    id: str
    x_m: float
    kind: SupportKind = "simple"


@dataclass(frozen=True)
class BeamModel:
    """
    Viga recta de longitud L_m (m), cargas en kN y kN/m.
    Las posiciones se miden desde el extremo izquierdo (x=0).
    """
    id: str
    L_m: float
    supports: Sequence[Support]
    point_loads: Optional[Sequence[PointLoad]] = ()
    dist_loads: Optional[Sequence[DistributedLoad]] = ()

    def __post_init__(self):
        # cargas opcionales: None equivale a "sin cargas"
        if self.point_loads is None:
            object.__setattr__(self, "point_loads", ())
        if self.dist_loads is None:
            object.__setattr__(self, "dist_loads", ())

    def supports_by_position(self) -> Tuple[Support, ...]:
        return tuple(sorted(self.supports, key=lambda s: float(s.x_m)))
