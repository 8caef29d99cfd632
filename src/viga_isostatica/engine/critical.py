from __future__ import annotations

from typing import List, Optional, Sequence

from viga_isostatica.domain.results import CriticalPoint, DiagramSegment
from viga_isostatica.domain.labels import DIAGRAM_NAMES, DiagramLabel, fmt

ZERO_TOL = 0.001


def linear_zero(x0: float, x1: float, v0: float, v1: float, tol: float = ZERO_TOL) -> Optional[float]:
    """
    Cero de la recta entre (x0, v0) y (x1, v1) si los extremos tienen signos
    estrictamente opuestos. Un extremo con |v| <= tol cuenta como nulo (toca cero,
    no cruza): evita reportar el ruido de redondeo de M en los apoyos.
    """
    if abs(v0) <= tol or abs(v1) <= tol:
        return None
    if v0 * v1 >= 0:
        return None
    x = x0 - v0 * (x1 - x0) / (v1 - v0)
    if x0 <= x <= x1:
        return x
    return None


def extract_critical_points(
    segments: Sequence[DiagramSegment],
    label: DiagramLabel,
    tol: float = ZERO_TOL,
) -> List[CriticalPoint]:
    """
    Por tramo:
      - cambio de signo estricto entre extremos -> 'zero' (interpolación lineal)
      - |valor inicial| > tol -> 'discontinuity' en el inicio del tramo
    """
    name = DIAGRAM_NAMES.get(label, label)
    points: List[CriticalPoint] = []

    for seg in segments:
        v0 = seg.v_start
        v1 = seg.v_end

        xz = linear_zero(seg.x_start, seg.x_end, v0, v1, tol)
        if xz is not None:
            points.append(CriticalPoint(
                x_m=xz,
                value=0.0,
                kind="zero",
                description=f"{name} = 0 en x = {fmt(xz)} m",
            ))

        if abs(v0) > tol:
            points.append(CriticalPoint(
                x_m=seg.x_start,
                value=v0,
                kind="discontinuity",
                description=f"{name} = {fmt(v0)} en x = {fmt(seg.x_start)} m",
            ))

    return points


def find_extrema(
    segments: Sequence[DiagramSegment],
    label: DiagramLabel,
    tol: float = ZERO_TOL,
) -> List[CriticalPoint]:
    """
    Máximo y mínimo globales del diagrama (los tramos son lineales, basta
    con los extremos de cada tramo). Se ignoran valores con |v| <= tol.
    """
    name = DIAGRAM_NAMES.get(label, label)
    cand = []
    for seg in segments:
        cand.append((seg.x_start, seg.v_start))
        cand.append((seg.x_end, seg.v_end))
    if not cand:
        return []

    x_max, v_max = max(cand, key=lambda c: c[1])
    x_min, v_min = min(cand, key=lambda c: c[1])

    out: List[CriticalPoint] = []
    if v_max > tol:
        out.append(CriticalPoint(
            x_m=x_max,
            value=v_max,
            kind="maximum",
            description=f"{name} máximo = {fmt(v_max)} en x = {fmt(x_max)} m",
        ))
    if v_min < -tol:
        out.append(CriticalPoint(
            x_m=x_min,
            value=v_min,
            kind="minimum",
            description=f"{name} mínimo = {fmt(v_min)} en x = {fmt(x_min)} m",
        ))

    out.sort(key=lambda c: c.x_m)
    return out
