# path: src/viga_isostatica/services/memoria_calculo_pdf.py
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors, pagesizes
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Image, PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from viga_isostatica.domain.beam import BeamModel
from viga_isostatica.domain.results import CriticalPoint, ResultView

# Nota: este módulo no dibuja. Acepta paths a imágenes ya generadas
# (escena y diagramas) y el resultado del solver.


@dataclass(frozen=True)
class MemoriaHeader:
    titulo: str
    cliente_proyecto: str = ""
    autor: str = ""
    fecha: Optional[datetime] = None
    revision: str = "A"


def export_memoria_pdf(
    out_pdf_path: str,
    header: MemoriaHeader,
    model: BeamModel,
    result: ResultView,
    imagenes: Optional[Dict[str, str]] = None,
    page_size=pagesizes.A4,
) -> None:
    """
    Genera una Memoria de Cálculo en PDF (A4) para una viga isostática.

    imagenes: claves 'escena' y 'diagramas' -> path a PNG/JPG.
    """
    imgs = _normalize_images_dict(imagenes)

    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(name="H1c", parent=styles["Heading1"], alignment=TA_CENTER))
    styles.add(ParagraphStyle(name="Small", parent=styles["BodyText"], fontSize=9, leading=11))
    styles.add(ParagraphStyle(name="MonoSmall", parent=styles["BodyText"], fontName="Courier", fontSize=8, leading=10))

    doc = SimpleDocTemplate(
        out_pdf_path,
        pagesize=page_size,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=12 * mm,
        bottomMargin=12 * mm,
        title=header.titulo,
    )

    story: List[object] = []

    # ----------------- Portada -----------------
    story.append(Paragraph(header.titulo, styles["H1c"]))
    story.append(Spacer(1, 4 * mm))

    fecha = header.fecha or datetime.now()
    meta_rows = [
        ["Proyecto / Cliente:", header.cliente_proyecto or "-"],
        ["Autor:", header.autor or "-"],
        ["Fecha:", fecha.strftime("%Y-%m-%d %H:%M")],
        ["Revisión:", header.revision],
        ["Viga:", model.id],
    ]
    t = Table(meta_rows, colWidths=[40 * mm, 140 * mm])
    t.setStyle(_kv_table_style())
    story.append(t)
    story.append(Spacer(1, 6 * mm))

    story.append(Paragraph("Base teórica y supuestos", styles["Heading2"]))
    base = [
        "Viga isostática con dos apoyos (simple / rodillo) que solo desarrollan reacción vertical.",
        "Cargas distribuidas reemplazadas por su resultante aplicada en el centroide del diagrama de carga.",
        "Convención: cargas hacia abajo positivas en ΣF; momentos antihorarios positivos "
        "(una carga hacia abajo aporta momento negativo respecto a A).",
        "V(x) escalonado entre posiciones de cargas y reacciones; M(x) es la integral acumulada de V(x) con M(0) = 0.",
    ]
    story.extend(_bullets(base, styles))
    story.append(Spacer(1, 3 * mm))

    story.append(Paragraph("Ecuaciones principales", styles["Heading3"]))
    eq = [
        "P_eq = (w1 + w2) / 2 · (x2 - x1)",
        "ΣMA = 0  ⇒  RB = -MA / d",
        "ΣFy = 0  ⇒  RA = ΣF - RB",
        "M(x) = M0 + V · (x - x0)",
    ]
    story.extend(_mono_block(eq, styles))
    story.append(Spacer(1, 4 * mm))

    # ----------------- Datos -----------------
    story.append(Paragraph("Datos de la viga", styles["Heading2"]))
    t = Table([["L [m]", _f(model.L_m, 3)]], colWidths=[55 * mm, 125 * mm])
    t.setStyle(_kv_table_style())
    story.append(t)
    story.append(Spacer(1, 3 * mm))

    story.append(Paragraph("Apoyos", styles["Heading3"]))
    arows = [["Apoyo", "Tipo", "x [m]"]] + [
        [s.id, s.kind, _f(s.x_m, 3)] for s in model.supports_by_position()
    ]
    t = Table(arows, colWidths=[40 * mm, 70 * mm, 70 * mm])
    t.setStyle(_grid_table_style(header_rows=1))
    story.append(t)
    story.append(Spacer(1, 3 * mm))

    story.append(Paragraph("Cargas aplicadas", styles["Heading3"]))
    crows = [["Carga", "Detalle"]]
    crows += [[p.id, f"x={_f(p.x_m, 3)} m; P={_f(p.P_kN, 3)} kN ({p.direction})"] for p in model.point_loads]
    crows += [
        [d.id, f"[{_f(d.x1_m, 3)}, {_f(d.x2_m, 3)}] m; w={_f(d.w1_kN_m, 3)}→{_f(d.w2_kN_m, 3)} kN/m ({d.direction})"]
        for d in model.dist_loads
    ]
    t = Table(crows, colWidths=[40 * mm, 140 * mm])
    t.setStyle(_grid_table_style(header_rows=1))
    story.append(t)
    story.append(Spacer(1, 4 * mm))

    # ----------------- Resultados -----------------
    story.append(Paragraph("Resultados", styles["Heading2"]))
    if not result.is_valid:
        story.append(Paragraph("La estructura no pudo resolverse:", styles["BodyText"]))
        story.extend(_bullets(list(result.errors), styles))
    else:
        rrows = [["Apoyo", "x [m]", "R [kN]", "Sentido"]] + [
            [r.support_id, _f(r.x_m, 3), _f(r.R_kN, 3), r.direction] for r in result.reactions
        ]
        t = Table(rrows, colWidths=[40 * mm, 45 * mm, 50 * mm, 45 * mm])
        t.setStyle(_grid_table_style(header_rows=1))
        story.append(t)
        story.append(Spacer(1, 3 * mm))

        t = Table(
            [["Residual ΣFy", _f(result.residual_Fy, 9)], ["Residual ΣMA", _f(result.residual_M_A, 9)]],
            colWidths=[80 * mm, 100 * mm],
        )
        t.setStyle(_kv_table_style())
        story.append(t)
        story.append(Spacer(1, 3 * mm))

        _append_points(story, styles, "Puntos críticos de V(x) [kN]",
                       result.shear_extrema + result.shear_critical_points)
        _append_points(story, styles, "Puntos críticos de M(x) [kN·m]",
                       result.moment_extrema + result.moment_critical_points)

    # ----------------- Procedimiento -----------------
    story.append(PageBreak())
    story.append(Paragraph("Procedimiento de cálculo", styles["Heading2"]))
    for s in result.steps:
        story.append(Paragraph(escape(f"{s.number}. {s.title}"), styles["Heading3"]))
        story.append(Paragraph(escape(s.description), styles["Small"]))
        lines = [ln for ln in (s.equation, s.calculation, s.result) if ln]
        story.extend(_mono_block(lines, styles))
        story.append(Spacer(1, 2 * mm))

    # ----------------- Figuras -----------------
    if imgs:
        story.append(PageBreak())
        story.append(Paragraph("Figuras", styles["Heading2"]))
        _append_figure(story, styles, "escena", "Diagrama de cuerpo libre", imgs, max_w=180 * mm, max_h=95 * mm)
        _append_figure(story, styles, "diagramas", "Diagramas V(x) y M(x)", imgs, max_w=180 * mm, max_h=120 * mm)

    doc.build(story)


# ----------------- helpers -----------------

def _append_points(story: List[object], styles, title: str, points: Sequence[CriticalPoint]):
    if not points:
        return
    story.append(Paragraph(title, styles["Heading3"]))
    rows = [["Tipo", "x [m]", "Valor", "Descripción"]]
    for c in points:
        rows.append([c.kind, _f(c.x_m, 3), _f(c.value, 3), c.description])
    t = Table(rows, colWidths=[30 * mm, 25 * mm, 30 * mm, 95 * mm])
    t.setStyle(_grid_table_style(header_rows=1))
    story.append(t)
    story.append(Spacer(1, 3 * mm))


def _normalize_images_dict(imagenes: Optional[Dict[str, str]]) -> Dict[str, str]:
    if not imagenes:
        return {}
    out: Dict[str, str] = {}
    for k, v in imagenes.items():
        kk = (k or "").strip().lower()
        vv = (v or "").strip()
        if not kk or not vv:
            continue
        out[kk] = vv
    return out


def _append_figure(story: List[object], styles, key: str, title: str, imgs: Dict[str, str], *, max_w: float, max_h: float):
    story.append(Paragraph(title, styles["Heading3"]))
    path = (imgs.get(key) or "").strip()
    if path and os.path.exists(path):
        story.append(_img(path, max_w=max_w, max_h=max_h))
    else:
        # Dejar evidencia en el PDF si no se insertó la imagen
        story.append(Paragraph(f"(Sin imagen: '{key}' no disponible o no existe en disco)", styles["Small"]))
    story.append(Spacer(1, 3 * mm))


def _f(v: float, dec: int) -> str:
    s = f"{float(v):.{dec}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    if s == "-0":
        s = "0"
    return s


def _bullets(items: List[str], styles):
    out: List[object] = []
    for it in items:
        out.append(Paragraph(f"• {escape(it)}", styles["BodyText"]))
        out.append(Spacer(1, 1.2 * mm))
    return out


def _mono_block(lines: List[str], styles):
    out: List[object] = []
    for ln in lines:
        out.append(Paragraph(escape(ln).replace(" ", "&nbsp;"), styles["MonoSmall"]))
    return out


def _kv_table_style():
    return TableStyle(
        [
            ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
            ("FONTSIZE", (0, 0), (-1, -1), 10),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
            ("BACKGROUND", (0, 0), (0, -1), colors.whitesmoke),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LEFTPADDING", (0, 0), (-1, -1), 6),
            ("RIGHTPADDING", (0, 0), (-1, -1), 6),
            ("TOPPADDING", (0, 0), (-1, -1), 4),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ]
    )


def _grid_table_style(header_rows: int = 1, font_size: int = 9):
    ts = [
        ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 0), (-1, -1), font_size),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LEFTPADDING", (0, 0), (-1, -1), 4),
        ("RIGHTPADDING", (0, 0), (-1, -1), 4),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]
    if header_rows > 0:
        ts += [
            ("BACKGROUND", (0, 0), (-1, header_rows - 1), colors.lightgrey),
            ("FONTNAME", (0, 0), (-1, header_rows - 1), "Helvetica-Bold"),
        ]
    return TableStyle(ts)


def _img(path: str, *, max_w: float, max_h: float):
    img = Image(path)
    iw, ih = img.imageWidth, img.imageHeight
    if iw <= 0 or ih <= 0:
        return img
    scale = min(max_w / iw, max_h / ih, 1.0)
    img.drawWidth = iw * scale
    img.drawHeight = ih * scale
    return img
