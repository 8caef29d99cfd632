from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Optional, Tuple

from viga_isostatica.domain.labels import Direction, SupportKind

MemberKind = Literal["beam", "column", "bar"]
LoadKind = Literal["point", "distributed", "moment"]
SceneReactionKind = Literal["vertical", "horizontal", "moment"]
DiagramKind = Literal["shear", "moment"]


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class GraphicMember:
    id: str
    start: Point
    end: Point
    kind: MemberKind = "beam"


@dataclass(frozen=True)
class GraphicSupport:
    id: str
    position: Point
    kind: SupportKind


@dataclass(frozen=True)
class GraphicLoad:
    id: str
    position: Point
    kind: LoadKind
    magnitude: float
    direction: Direction
    length: Optional[float] = None          # solo distribuidas
    magnitude_end: Optional[float] = None   # solo distribuidas
    unit: str = "kN"


@dataclass(frozen=True)
class GraphicReaction:
    id: str
    position: Point
    kind: SceneReactionKind
    magnitude: float
    direction: Direction
    unit: str = "kN"


@dataclass(frozen=True)
class GraphicDiagram:
    """
    Polilínea de un diagrama en coordenadas de escena:
      y = y_offset - valor / value_scale
    y_offset es la línea base (valor nulo) del diagrama.
    """
    id: str
    kind: DiagramKind
    points: Tuple[Point, ...]
    y_offset: float
    value_scale: float


@dataclass(frozen=True)
class GraphicLabel:
    id: str
    position: Point
    text: str


@dataclass(frozen=True)
class GraphicScene:
    """
    Descripción geométrica/semántica de la escena, en metros (x, y hacia arriba).
    scale: unidades de dibujo por metro; el ajuste al viewport queda para el renderer.
    """
    scale: float
    members: Tuple[GraphicMember, ...] = ()
    supports: Tuple[GraphicSupport, ...] = ()
    loads: Tuple[GraphicLoad, ...] = ()
    reactions: Tuple[GraphicReaction, ...] = ()
    diagrams: Tuple[GraphicDiagram, ...] = ()
    labels: Tuple[GraphicLabel, ...] = ()

    def is_empty(self) -> bool:
        return not (self.members or self.supports or self.loads
                    or self.reactions or self.diagrams or self.labels)


@dataclass(frozen=True)
class SceneProjection:
    main_scene: GraphicScene
    diagram_scene: GraphicScene
