from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from viga_isostatica.domain.beam import BeamModel
from viga_isostatica.domain.labels import fmt, fmt_term
from viga_isostatica.domain.results import CalculationStep, ResultView
from viga_isostatica.engine.critical import extract_critical_points, find_extrema
from viga_isostatica.engine.diagrams import build_moment, build_shear
from viga_isostatica.engine.equilibrium import solve_reactions
from viga_isostatica.engine.normalize import normalize_loads
from viga_isostatica.engine.validation import validate_model

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolverOptions:
    shear_samples: int = 5
    moment_samples: int = 20
    zero_tol: float = 0.001
    equilibrium_tol: float = 1e-6


class _StepLog:
    """Registro de pasos de cálculo (solo agrega, numeración correlativa)."""

    def __init__(self):
        self._steps: List[CalculationStep] = []

    def add(
        self,
        title: str,
        description: str,
        equation: Optional[str] = None,
        calculation: Optional[str] = None,
        result: Optional[str] = None,
    ) -> None:
        self._steps.append(CalculationStep(
            number=len(self._steps) + 1,
            title=title,
            description=description,
            equation=equation,
            calculation=calculation,
            result=result,
        ))

    def freeze(self):
        return tuple(self._steps)


def _invalid(errors: List[str], steps: _StepLog) -> ResultView:
    return ResultView(
        reactions=(),
        shear_segments=(),
        moment_segments=(),
        shear_critical_points=(),
        moment_critical_points=(),
        steps=steps.freeze(),
        is_valid=False,
        errors=tuple(errors),
    )


def solve(model: BeamModel, options: SolverOptions = SolverOptions()) -> ResultView:
    """
    Resuelve una viga isostática de dos apoyos:
      validar -> cargas equivalentes -> reacciones -> V(x) -> M(x) -> puntos críticos

    No lanza excepciones por geometría: un modelo inválido devuelve
    is_valid=False con la lista de errores.
    """
    steps = _StepLog()
    L = float(model.L_m)

    # Paso 1: validación
    errors = validate_model(model)
    steps.add(
        "Validación de la estructura",
        "Verificar que la viga sea isostática",
        calculation=f"Apoyos: {len(model.supports)}, Longitud: {fmt(L)} m",
        result="✓ Estructura válida para análisis isostático" if not errors
        else "✗ " + "; ".join(errors),
    )
    if errors:
        logger.warning("Modelo %s inválido: %s", model.id, "; ".join(errors))
        return _invalid(errors, steps)

    # Paso 2: cargas distribuidas -> puntuales equivalentes
    loads = normalize_loads(model)
    if model.dist_loads:
        steps.add(
            "Conversión de cargas distribuidas",
            "Convertir cargas distribuidas a cargas puntuales equivalentes",
        )
        equivalents = loads[len(model.point_loads):]
        for dl, eq in zip(model.dist_loads, equivalents):
            w_avg = 0.5 * (float(dl.w1_kN_m) + float(dl.w2_kN_m))
            steps.add(
                f"Carga distribuida {dl.id}",
                "Cálculo de resultante y centroide",
                equation="P = (w1 + w2) / 2 × L",
                calculation=f"P = {fmt(w_avg)} × {fmt(dl.length_m)} = {fmt(eq.P_kN)} kN",
                result=f"Resultante en x = {fmt(eq.x_m)} m ({eq.direction})",
            )

    # Paso 3: reacciones
    eqr = solve_reactions(model.supports, loads)
    R_A, R_B = eqr.reactions
    steps.add(
        "Cálculo de reacciones",
        "Aplicar ecuaciones de equilibrio estático",
        equation="∑Fy = 0, ∑MA = 0",
        calculation=f"∑F = {fmt(eqr.sum_F)} kN, ∑MA(cargas) = {fmt(eqr.M_A)} kN·m, d = {fmt(eqr.d_AB)} m",
    )
    steps.add(
        "Equilibrio de momentos respecto al apoyo A",
        f"Momentos respecto a {R_A.support_id} (antihorario positivo)",
        equation="∑MA = 0  ⇒  RB = -MA / d",
        calculation=f"RB × {fmt(eqr.d_AB)} + {fmt_term(eqr.M_A)} = 0",
        result=f"RB = {fmt(R_B.R_kN)} kN ({R_B.direction})",
    )
    steps.add(
        "Equilibrio de fuerzas verticales",
        "Suma de fuerzas verticales",
        equation="∑Fy = 0  ⇒  RA = ∑F - RB",
        calculation=f"RA + {fmt_term(R_B.value_kN)} - {fmt_term(eqr.sum_F)} = 0",
        result=f"RA = {fmt(R_A.R_kN)} kN ({R_A.direction})",
    )

    # Paso 4: V(x)
    shear = build_shear(L, loads, eqr.reactions, n_points=options.shear_samples)
    steps.add(
        "Diagrama de fuerza cortante V(x)",
        "Calcular cortante en cada tramo de la viga",
        calculation="; ".join(f"[{fmt(s.x_start)}, {fmt(s.x_end)}]: {s.equation}" for s in shear),
    )

    # Paso 5: M(x)
    moment = build_moment(shear, n_points=options.moment_samples)
    steps.add(
        "Diagrama de momento flector M(x)",
        "Integrar fuerza cortante para obtener momento",
        calculation="; ".join(f"[{fmt(s.x_start)}, {fmt(s.x_end)}]: {s.equation}" for s in moment),
    )

    # Paso 6: puntos críticos
    cp_V = extract_critical_points(shear, "shear", tol=options.zero_tol)
    cp_M = extract_critical_points(moment, "moment", tol=options.zero_tol)
    ext_V = find_extrema(shear, "shear", tol=options.zero_tol)
    ext_M = find_extrema(moment, "moment", tol=options.zero_tol)
    steps.add(
        "Puntos críticos",
        "Ceros y extremos de V(x) y M(x)",
        result="; ".join(
            c.description
            for c in ([z for z in cp_V + cp_M if z.kind == "zero"] + ext_V + ext_M)
        ) or None,
    )

    # Paso 7: verificación
    ok = (abs(eqr.residual_Fy) <= options.equilibrium_tol * max(1.0, abs(eqr.sum_F))
          and abs(eqr.residual_M_A) <= options.equilibrium_tol * max(1.0, abs(eqr.M_A)))
    steps.add(
        "Verificación de equilibrio",
        "Residuales de ∑Fy y ∑MA con las reacciones calculadas",
        calculation=f"∑Fy = {eqr.residual_Fy:.3e}, ∑MA = {eqr.residual_M_A:.3e}",
        result="✓ Equilibrio verificado" if ok else "✗ Residual fuera de tolerancia",
    )
    if not ok:
        logger.warning("Modelo %s: residuales de equilibrio fuera de tolerancia (Fy=%g, MA=%g)",
                       model.id, eqr.residual_Fy, eqr.residual_M_A)

    logger.debug("Modelo %s resuelto: RA=%g, RB=%g, %d tramos",
                 model.id, R_A.value_kN, R_B.value_kN, len(shear))

    return ResultView(
        reactions=eqr.reactions,
        shear_segments=tuple(shear),
        moment_segments=tuple(moment),
        shear_critical_points=tuple(cp_V),
        moment_critical_points=tuple(cp_M),
        steps=steps.freeze(),
        is_valid=True,
        errors=(),
        shear_extrema=tuple(ext_V),
        moment_extrema=tuple(ext_M),
        equivalent_loads=tuple(loads),
        residual_Fy=eqr.residual_Fy,
        residual_M_A=eqr.residual_M_A,
    )
