from __future__ import annotations

from typing import List

from viga_isostatica.domain.beam import BeamModel
from viga_isostatica.domain.labels import (
    DIRECTIONS, SUPPORT_KINDS, UNKNOWNS_BY_KIND, VERTICAL_ONLY_KINDS
)

# Ecuaciones de equilibrio en el plano
N_EQUATIONS = 3


def is_isostatic(n_supports: int, n_unknowns: int) -> bool:
    return n_supports >= 2 and n_unknowns <= N_EQUATIONS


def validate_model(model: BeamModel) -> List[str]:
    """
    Errores de validez estructural y de geometría degenerada.
    Lista vacía => el modelo se puede resolver.
    """
    errors: List[str] = []
    L = float(model.L_m)

    if L <= 0:
        errors.append(f"Longitud de viga inválida: L = {L:g} m (debe ser > 0).")

    supports = list(model.supports)
    n = len(supports)
    bad_kinds = [s for s in supports if s.kind not in SUPPORT_KINDS]
    for s in bad_kinds:
        errors.append(f'Apoyo {s.id}: tipo desconocido "{s.kind}".')

    n_unknowns = sum(UNKNOWNS_BY_KIND.get(s.kind, 0) for s in supports)
    if n < 2:
        errors.append(f"La estructura no es isostática: se requieren 2 apoyos (hay {n}).")
    elif n > 2:
        errors.append(f"La estructura es hiperestática: {n} apoyos (solo se admiten 2).")
    elif not is_isostatic(n, n_unknowns):
        errors.append(
            f"La estructura es hiperestática: {n_unknowns} reacciones incógnitas "
            f"para {N_EQUATIONS} ecuaciones de equilibrio."
        )

    for s in supports:
        if s.kind in SUPPORT_KINDS and s.kind not in VERTICAL_ONLY_KINDS:
            errors.append(f'Apoyo {s.id}: tipo "{s.kind}" no admitido (solo simple / roller).')
        if not (0.0 <= float(s.x_m) <= L):
            errors.append(f"Apoyo {s.id}: x = {float(s.x_m):g} m fuera de la viga [0, {L:g}].")

    if n == 2:
        x_a, x_b = sorted(float(s.x_m) for s in supports)
        if x_b - x_a <= 0:
            errors.append(f"Apoyos coincidentes en x = {x_a:g} m (distancia entre apoyos nula).")

    for p in model.point_loads:
        if float(p.P_kN) < 0:
            errors.append(f"Carga {p.id}: magnitud negativa ({float(p.P_kN):g} kN); use direction.")
        if p.direction not in DIRECTIONS:
            errors.append(f'Carga {p.id}: dirección inválida "{p.direction}".')
        if not (0.0 <= float(p.x_m) <= L):
            errors.append(f"Carga {p.id}: x = {float(p.x_m):g} m fuera de la viga [0, {L:g}].")

    for dl in model.dist_loads:
        x1 = float(dl.x1_m)
        x2 = float(dl.x2_m)
        if x2 <= x1:
            errors.append(f"Carga distribuida {dl.id}: tramo nulo o invertido [{x1:g}, {x2:g}] m.")
        if float(dl.w1_kN_m) < 0 or float(dl.w2_kN_m) < 0:
            errors.append(f"Carga distribuida {dl.id}: intensidades negativas; use direction.")
        if dl.direction not in DIRECTIONS:
            errors.append(f'Carga distribuida {dl.id}: dirección inválida "{dl.direction}".')
        if x1 < 0.0 or x2 > L:
            errors.append(f"Carga distribuida {dl.id}: [{x1:g}, {x2:g}] m fuera de la viga [0, {L:g}].")

    return errors
