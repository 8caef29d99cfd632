from __future__ import annotations

from typing import List

from viga_isostatica.domain.beam import BeamModel
from viga_isostatica.domain.loads import PointLoad, DistributedLoad


def centroid_offset(length: float, w1: float, w2: float) -> float:
    """
    Distancia desde x1 al centroide del diagrama de carga (uniforme,
    triangular o trapezoidal).
    """
    if w1 == w2:
        return length / 2.0
    if w1 == 0:
        return 2.0 * length / 3.0
    if w2 == 0:
        return length / 3.0
    return length * (2.0 * w2 + w1) / (3.0 * (w1 + w2))


def distributed_to_equivalent(load: DistributedLoad) -> PointLoad:
    """
    Carga puntual estáticamente equivalente a una distribuida.
      P = (w1 + w2) / 2 * L   (regla del trapecio)
      x = x1 + centroide
    """
    x1 = float(load.x1_m)
    x2 = float(load.x2_m)
    length = x2 - x1
    if length <= 0:
        raise ValueError(
            f"Carga distribuida {load.id}: tramo inválido [{x1:g}, {x2:g}] m (fin <= inicio)."
        )

    w1 = float(load.w1_kN_m)
    w2 = float(load.w2_kN_m)
    total = 0.5 * (w1 + w2) * length

    return PointLoad(
        id=f"equiv_{load.id}",
        x_m=x1 + centroid_offset(length, w1, w2),
        P_kN=abs(total),
        direction=load.direction,
    )


def normalize_loads(model: BeamModel) -> List[PointLoad]:
    """Cargas puntuales originales + una equivalente por cada distribuida."""
    loads: List[PointLoad] = list(model.point_loads)
    for dl in model.dist_loads:
        loads.append(distributed_to_equivalent(dl))
    return loads
