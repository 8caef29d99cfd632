from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from viga_isostatica.domain.loads import PointLoad
from viga_isostatica.domain.results import DiagramSegment, Reaction
from viga_isostatica.domain.labels import fmt, sign_Fy


def sample_linear(x0: float, x1: float, v0: float, v1: float, n: int = 20) -> Tuple[Tuple[float, float], ...]:
    """
    Polilínea lineal entre (x0, v0) y (x1, v1) con n puntos.
    Los extremos se fijan exactos para que los tramos empalmen sin error de redondeo.
    """
    n = max(2, int(n))
    xs = np.linspace(float(x0), float(x1), n, dtype=float)
    if x1 > x0:
        vs = v0 + (v1 - v0) * (xs - x0) / (x1 - x0)
    else:
        vs = np.full_like(xs, v0)

    pts = list(zip(xs.tolist(), vs.tolist()))
    pts[0] = (float(x0), float(v0))
    pts[-1] = (float(x1), float(v1))
    return tuple(pts)


def breakpoints(L: float, loads: Sequence[PointLoad], reactions: Sequence[Reaction]) -> List[float]:
    """Posiciones donde puede cambiar el corte: 0, cargas, reacciones y L (ordenadas, sin repetir)."""
    xs = [0.0, float(L)]
    xs += [float(p.x_m) for p in loads]
    xs += [float(r.x_m) for r in reactions]
    return sorted(set(xs))


def shear_at_start(x: float, loads: Sequence[PointLoad], reactions: Sequence[Reaction]) -> float:
    """Suma de reacciones (up+) y cargas (down-, up+) ubicadas en posición <= x."""
    V = 0.0
    for r in reactions:
        if float(r.x_m) <= x:
            V += float(r.value_kN)
    for p in loads:
        if float(p.x_m) <= x:
            V += sign_Fy(p.direction) * float(p.P_kN)
    return V


def build_shear(
    L: float,
    loads: Sequence[PointLoad],
    reactions: Sequence[Reaction],
    n_points: int = 5,
) -> List[DiagramSegment]:
    """
    V(x) escalonado: constante entre posiciones críticas consecutivas.
    Los tramos cubren [0, L] sin huecos ni solapes.
    """
    xs = breakpoints(L, loads, reactions)
    segments: List[DiagramSegment] = []

    for a, b in zip(xs[:-1], xs[1:]):
        V = shear_at_start(a, loads, reactions)
        segments.append(DiagramSegment(
            x_start=a,
            x_end=b,
            equation=f"V = {fmt(V)} kN",
            points=sample_linear(a, b, V, V, n_points),
        ))

    return segments


def build_moment(shear_segments: Sequence[DiagramSegment], n_points: int = 20) -> List[DiagramSegment]:
    """
    M(x) como integral acumulada de V(x), con M(0) = 0.
    Para V constante en el tramo: M = M0 + V·(x - x0). M es continuo.
    """
    segments: List[DiagramSegment] = []
    M_prev = 0.0

    for seg in shear_segments:
        V = seg.v_start
        M0 = M_prev
        M1 = M0 + V * (seg.x_end - seg.x_start)

        segments.append(DiagramSegment(
            x_start=seg.x_start,
            x_end=seg.x_end,
            equation=f"M = {fmt(M0)} + {fmt(V)} × (x - {fmt(seg.x_start)})",
            points=sample_linear(seg.x_start, seg.x_end, M0, M1, n_points),
        ))
        M_prev = M1

    return segments


def value_at(segments: Sequence[DiagramSegment], x: float) -> float:
    """
    Evalúa un diagrama por tramos en x.
    En una posición de salto devuelve el valor a la derecha (tramo que empieza en x).
    """
    if not segments:
        raise ValueError("Diagrama vacío.")
    x = float(x)
    for seg in segments:
        if seg.x_start <= x < seg.x_end:
            return seg.value_at(x)
    last = segments[-1]
    if x >= last.x_end:
        return last.v_end
    return segments[0].v_start
