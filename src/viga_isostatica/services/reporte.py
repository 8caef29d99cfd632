from __future__ import annotations

from typing import List

from viga_isostatica.domain.results import ResultView


def generar_reporte(result: ResultView) -> str:
    """Reporte de texto plano: estado, reacciones, puntos críticos y procedimiento."""
    lines: List[str] = ["=== REPORTE DE ANÁLISIS ESTRUCTURAL ===", ""]

    lines.append(f"Estado: {'✓ Válida' if result.is_valid else '✗ Inválida'}")
    if result.errors:
        lines.append(f"Errores: {', '.join(result.errors)}")
    lines.append("")

    lines.append("--- REACCIONES EN APOYOS ---")
    for r in result.reactions:
        unit = "kN" if r.kind == "vertical" else "kN·m"
        lines.append(f"{r.support_id}: {r.R_kN:.2f} {unit} ({r.direction})")
    lines.append("")

    lines.append("--- PUNTOS CRÍTICOS ---")
    lines.append("Fuerza Cortante:")
    for c in result.shear_critical_points + result.shear_extrema:
        lines.append(f"  • {c.description}")
    lines.append("")
    lines.append("Momento Flector:")
    for c in result.moment_critical_points + result.moment_extrema:
        lines.append(f"  • {c.description}")
    lines.append("")

    lines.append("--- PROCEDIMIENTO DE CÁLCULO ---")
    for s in result.steps:
        lines.append(f"{s.number}. {s.title}")
        if s.description:
            lines.append(f"   {s.description}")
        if s.equation:
            lines.append(f"   Ecuación: {s.equation}")
        if s.calculation:
            lines.append(f"   Cálculo: {s.calculation}")
        if s.result:
            lines.append(f"   Resultado: {s.result}")
        lines.append("")

    return "\n".join(lines)
