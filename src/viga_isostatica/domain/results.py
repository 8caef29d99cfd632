from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from viga_isostatica.domain.labels import CriticalKind, Direction, ReactionKind
from viga_isostatica.domain.loads import PointLoad


@dataclass(frozen=True)
class Reaction:
    support_id: str
    x_m: float
    R_kN: float          # magnitud >= 0
    kind: ReactionKind = "vertical"
    direction: Direction = "up"

    @property
    def value_kN(self) -> float:
        """Valor con signo (+ hacia arriba)."""
        return self.R_kN if self.direction == "up" else -self.R_kN


@dataclass(frozen=True)
class DiagramSegment:
    """
    Tramo de un diagrama V(x) o M(x): constante o lineal entre x_start y x_end.
    points: polilínea muestreada ((x, valor), ...), incluye ambos extremos.
    """
    x_start: float
    x_end: float
    equation: str
    points: Tuple[Tuple[float, float], ...]

    @property
    def length(self) -> float:
        return self.x_end - self.x_start

    @property
    def v_start(self) -> float:
        return self.points[0][1]

    @property
    def v_end(self) -> float:
        return self.points[-1][1]

    def value_at(self, x: float) -> float:
        if self.length <= 0:
            return self.v_start
        t = (float(x) - self.x_start) / self.length
        return self.v_start + (self.v_end - self.v_start) * t


@dataclass(frozen=True)
class CriticalPoint:
    x_m: float
    value: float
    kind: CriticalKind
    description: str


@dataclass(frozen=True)
class CalculationStep:
    number: int
    title: str
    description: str
    equation: Optional[str] = None
    calculation: Optional[str] = None
    result: Optional[str] = None


@dataclass(frozen=True)
class ResultView:
    """
    Resultado completo de una resolución. Se construye una sola vez por llamada.
    Si is_valid es False: reacciones y diagramas vacíos, errors con el motivo.
    """
    reactions: Tuple[Reaction, ...]
    shear_segments: Tuple[DiagramSegment, ...]
    moment_segments: Tuple[DiagramSegment, ...]
    shear_critical_points: Tuple[CriticalPoint, ...]
    moment_critical_points: Tuple[CriticalPoint, ...]
    steps: Tuple[CalculationStep, ...]
    is_valid: bool
    errors: Tuple[str, ...] = ()

    # Extremos globales (máximo / mínimo) de cada diagrama
    shear_extrema: Tuple[CriticalPoint, ...] = ()
    moment_extrema: Tuple[CriticalPoint, ...] = ()

    # Cargas puntuales usadas en el equilibrio (originales + equivalentes)
    equivalent_loads: Tuple[PointLoad, ...] = ()

    residual_Fy: float = 0.0     # debería ~0
    residual_M_A: float = 0.0    # debería ~0 (momento respecto al apoyo A)

    def reaction_for(self, support_id: str) -> Optional[Reaction]:
        for r in self.reactions:
            if r.support_id == support_id:
                return r
        return None
