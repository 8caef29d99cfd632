from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from viga_isostatica.domain.beam import BeamModel
from viga_isostatica.domain.labels import fmt, support_letter
from viga_isostatica.domain.results import DiagramSegment, ResultView
from viga_isostatica.domain.scene import (
    GraphicDiagram, GraphicLabel, GraphicLoad, GraphicMember, GraphicReaction,
    GraphicScene, GraphicSupport, Point, SceneProjection,
)
from viga_isostatica.engine.solver import SolverOptions, solve


@dataclass(frozen=True)
class ProjectionOptions:
    """
    Geometría de la escena en metros. scale es fija (unidades de dibujo por metro);
    el ajuste al tamaño de pantalla es responsabilidad del renderer.
    """
    scale: float = 100.0
    beam_y: float = 2.0
    label_dy: float = 1.0
    support_label_dy: float = 1.2

    # Líneas base de los diagramas (no se superponen: |y - offset| <= half_height)
    shear_y_offset: float = 1.0
    moment_y_offset: float = 3.5
    diagram_half_height: float = 1.0


def _peak(segments: Sequence[DiagramSegment]) -> float:
    vals = [abs(v) for seg in segments for _, v in seg.points]
    return max(vals) if vals else 0.0


def _diagram_points(segments: Sequence[DiagramSegment], y_offset: float, value_scale: float) -> Tuple[Point, ...]:
    # valor negado: lo físicamente "hacia abajo" se lee hacia arriba
    return tuple(
        Point(x=float(x), y=y_offset - float(v) / value_scale)
        for seg in segments
        for x, v in seg.points
    )


def project_main(model: BeamModel, result: ResultView, opts: ProjectionOptions = ProjectionOptions()) -> GraphicScene:
    """Escena estructural: viga, apoyos, cargas, reacciones y etiquetas."""
    if not result.is_valid:
        return GraphicScene(scale=opts.scale)

    L = float(model.L_m)
    y = float(opts.beam_y)

    members = (GraphicMember(
        id="viga-principal",
        start=Point(0.0, y),
        end=Point(L, y),
        kind="beam",
    ),)

    supports_sorted = model.supports_by_position()
    supports = tuple(
        GraphicSupport(id=s.id, position=Point(float(s.x_m), y), kind=s.kind)
        for s in supports_sorted
    )

    loads: List[GraphicLoad] = []
    for p in model.point_loads:
        loads.append(GraphicLoad(
            id=p.id,
            position=Point(float(p.x_m), y),
            kind="point",
            magnitude=float(p.P_kN),
            direction=p.direction,
            unit="kN",
        ))
    # Las distribuidas se muestran como tales (no como su equivalente)
    for dl in model.dist_loads:
        loads.append(GraphicLoad(
            id=dl.id,
            position=Point(float(dl.x1_m), y),
            kind="distributed",
            magnitude=float(dl.w1_kN_m),
            direction=dl.direction,
            length=dl.length_m,
            magnitude_end=float(dl.w2_kN_m),
            unit="kN/m",
        ))

    reactions = tuple(
        GraphicReaction(
            id=f"reaccion-{r.support_id}",
            position=Point(float(r.x_m), y),
            kind="moment" if r.kind == "moment" else "vertical",
            magnitude=float(r.R_kN),
            direction=r.direction,
            unit="kN·m" if r.kind == "moment" else "kN",
        )
        for r in result.reactions
    )

    labels = [GraphicLabel(
        id="longitud-viga",
        position=Point(L / 2.0, y + opts.label_dy),
        text=f"L = {L:.2f} m",
    )]
    for i, s in enumerate(supports_sorted):
        labels.append(GraphicLabel(
            id=f"etiqueta-{s.id}",
            position=Point(float(s.x_m), y + opts.support_label_dy),
            text=support_letter(i),
        ))

    return GraphicScene(
        scale=opts.scale,
        members=members,
        supports=supports,
        loads=tuple(loads),
        reactions=reactions,
        diagrams=(),
        labels=tuple(labels),
    )


def project_diagrams(model: BeamModel, result: ResultView, opts: ProjectionOptions = ProjectionOptions()) -> GraphicScene:
    """
    Escena de diagramas V(x) y M(x).
    value_scale se deriva del pico de cada diagrama para que la amplitud
    no supere diagram_half_height.
    """
    if not result.is_valid:
        return GraphicScene(scale=opts.scale)

    L = float(model.L_m)
    h = float(opts.diagram_half_height)

    diagrams: List[GraphicDiagram] = []
    labels: List[GraphicLabel] = []

    specs = (
        ("diagrama-cortante", "shear", result.shear_segments, opts.shear_y_offset,
         "Diagrama de Fuerza Cortante V(x)", result.shear_extrema, "V", "kN"),
        ("diagrama-momento", "moment", result.moment_segments, opts.moment_y_offset,
         "Diagrama de Momento Flector M(x)", result.moment_extrema, "M", "kN·m"),
    )
    for diag_id, kind, segments, y0, title, extrema, sym, unit in specs:
        peak = _peak(segments)
        value_scale = peak / h if peak > 0 else 1.0
        diagrams.append(GraphicDiagram(
            id=diag_id,
            kind=kind,
            points=_diagram_points(segments, y0, value_scale),
            y_offset=float(y0),
            value_scale=value_scale,
        ))
        labels.append(GraphicLabel(
            id=f"titulo-{diag_id}",
            position=Point(L / 2.0, y0 + 1.25 * h),
            text=title,
        ))
        for c in extrema:
            labels.append(GraphicLabel(
                id=f"{diag_id}-{c.kind}",
                position=Point(float(c.x_m), y0 - float(c.value) / value_scale),
                text=f"{sym} = {fmt(c.value, 2)} {unit}",
            ))

    return GraphicScene(
        scale=opts.scale,
        diagrams=tuple(diagrams),
        labels=tuple(labels),
    )


def project(model: BeamModel, result: ResultView, opts: ProjectionOptions = ProjectionOptions()) -> SceneProjection:
    return SceneProjection(
        main_scene=project_main(model, result, opts),
        diagram_scene=project_diagrams(model, result, opts),
    )


def solve_and_project(
    model: BeamModel,
    solver_options: SolverOptions = SolverOptions(),
    opts: ProjectionOptions = ProjectionOptions(),
) -> Tuple[ResultView, SceneProjection]:
    """Resuelve la viga y genera ambas escenas."""
    result = solve(model, solver_options)
    return result, project(model, result, opts)
