from __future__ import annotations

from typing import List

import numpy as np
from matplotlib.patches import Circle, Polygon

from viga_isostatica.domain.labels import fmt
from viga_isostatica.domain.scene import GraphicLoad, GraphicScene
from viga_isostatica.view.style import RenderStyle


# -------------------------
# Helpers generales
# -------------------------
def _draw_arrow(ax, x: float, y0: float, y1: float, color: str, style: RenderStyle):
    ax.annotate(
        "",
        xy=(x, y1),
        xytext=(x, y0),
        arrowprops=dict(
            arrowstyle="-|>",
            lw=style.arrow_lw,
            mutation_scale=style.arrow_scale,
            color=color,
            facecolor=color,
            shrinkA=0,
            shrinkB=0,
        ),
    )


def _draw_support(ax, x: float, y: float, kind: str, style: RenderStyle):
    s = float(style.support_size)
    tri = Polygon(
        [(x, y), (x - 0.5 * s, y - s), (x + 0.5 * s, y - s)],
        closed=True,
        facecolor="none",
        edgecolor=style.support_color,
        lw=1.2,
    )
    ax.add_patch(tri)
    if kind == "roller":
        r = 0.12 * s
        for dx in (-0.25 * s, 0.25 * s):
            ax.add_patch(Circle((x + dx, y - s - r), r, fill=False, edgecolor=style.support_color, lw=1.0))
        ax.plot([x - 0.6 * s, x + 0.6 * s], [y - s - 2 * r, y - s - 2 * r], lw=1.0, color=style.support_color)
    else:
        ax.plot([x - 0.6 * s, x + 0.6 * s], [y - s, y - s], lw=1.0, color=style.support_color)


def _draw_distributed(ax, ld: GraphicLoad, style: RenderStyle):
    x1 = float(ld.position.x)
    x2 = x1 + float(ld.length or 0.0)
    y = float(ld.position.y)
    w1 = float(ld.magnitude)
    w2 = float(ld.magnitude if ld.magnitude_end is None else ld.magnitude_end)
    w_max = max(w1, w2, 1e-12)
    h1 = style.dist_height * w1 / w_max
    h2 = style.dist_height * w2 / w_max

    # down => se dibuja arriba de la viga con flechas hacia la viga
    sgn = 1.0 if ld.direction == "down" else -1.0
    poly = Polygon(
        [(x1, y), (x1, y + sgn * h1), (x2, y + sgn * h2), (x2, y)],
        closed=True,
        facecolor=style.load_color,
        alpha=style.dist_rect_alpha,
        edgecolor=style.load_color,
        linewidth=style.dist_rect_lw,
    )
    ax.add_patch(poly)

    n_lines = max(3, int(round((x2 - x1) / 0.25)))
    for xi in np.linspace(x1, x2, n_lines):
        hi = h1 + (h2 - h1) * (xi - x1) / max(x2 - x1, 1e-12)
        if hi > 1e-9:
            _draw_arrow(ax, float(xi), y + sgn * hi, y, style.load_color, style)

    text = f"{ld.id}={fmt(w1, 2)} {ld.unit}" if w1 == w2 else f"{ld.id}={fmt(w1, 2)}→{fmt(w2, 2)} {ld.unit}"
    ax.text(
        0.5 * (x1 + x2),
        y + sgn * (style.dist_height + 0.1),
        text,
        ha="center",
        va="bottom" if sgn > 0 else "top",
        fontsize=style.font_size,
        color=style.load_color,
    )


# -------------------------
# Render principal
# -------------------------
def render_scene(ax, scene: GraphicScene, style: RenderStyle = RenderStyle()):
    """Dibuja la escena estructural (viga, apoyos, cargas, reacciones, etiquetas) en metros."""
    ax.clear()
    ys: List[float] = []
    xs: List[float] = []

    for m in scene.members:
        ax.plot([m.start.x, m.end.x], [m.start.y, m.end.y], lw=style.beam_lw, color=style.beam_color)
        xs += [m.start.x, m.end.x]
        ys += [m.start.y, m.end.y]

    for s in scene.supports:
        _draw_support(ax, s.position.x, s.position.y, s.kind, style)
        ys.append(s.position.y - 2 * style.support_size)

    for ld in scene.loads:
        x, y = ld.position.x, ld.position.y
        if ld.kind == "distributed":
            _draw_distributed(ax, ld, style)
            ys.append(y + style.dist_height + 0.4)
            continue
        # down => flecha desde arriba hacia la viga
        y0 = y + style.arrow_height if ld.direction == "down" else y - style.arrow_height
        _draw_arrow(ax, x, y0, y, style.load_color, style)
        ax.text(
            x, y0, f"{ld.id}={fmt(ld.magnitude, 2)} {ld.unit}",
            ha="center", va="bottom" if ld.direction == "down" else "top",
            fontsize=style.font_size, color=style.load_color,
        )
        ys.append(y0)

    for r in scene.reactions:
        x, y = r.position.x, r.position.y
        base = y - style.support_size
        y0 = base - style.arrow_height
        if r.direction == "up":
            _draw_arrow(ax, x, y0, base, style.reaction_color, style)
        else:
            _draw_arrow(ax, x, base, y0, style.reaction_color, style)
        ax.text(
            x, y0 - 0.05, f"{fmt(r.magnitude, 2)} {r.unit}",
            ha="center", va="top", fontsize=style.font_size, color=style.reaction_color,
        )
        ys.append(y0 - 0.4)

    for lb in scene.labels:
        ax.text(lb.position.x, lb.position.y, lb.text, ha="center", va="bottom", fontsize=style.font_size)
        ys.append(lb.position.y + 0.3)

    if xs:
        span = max(1.0, max(xs) - min(xs))
        ax.set_xlim(min(xs) - 0.05 * span, max(xs) + 0.05 * span)
    if ys:
        ax.set_ylim(min(ys) - 0.2, max(ys) + 0.2)

    ax.set_xlabel("x [m]")
    ax.set_yticks([])
    ax.set_title("Diagrama de Cuerpo Libre")
    ax.grid(True, axis="x", alpha=0.25)


def render_diagrams(ax, scene: GraphicScene, style: RenderStyle = RenderStyle()):
    """
    Dibuja las polilíneas de V(x) y M(x) con su línea base.
    Las coordenadas ya vienen escaladas por el proyector.
    """
    ax.clear()
    colors = {"shear": style.shear_color, "moment": style.moment_color}
    ys: List[float] = []
    xs: List[float] = []

    for d in scene.diagrams:
        if not d.points:
            continue
        px = np.array([p.x for p in d.points], dtype=float)
        py = np.array([p.y for p in d.points], dtype=float)
        color = colors.get(d.kind, "black")
        ax.plot(px, py, lw=style.diagram_lw, color=color)
        ax.fill_between(px, py, d.y_offset, color=color, alpha=0.12)
        ax.axhline(d.y_offset, linewidth=1.0, color="black")
        xs += [float(px.min()), float(px.max())]
        ys += [float(py.min()), float(py.max()), d.y_offset]

    for lb in scene.labels:
        is_title = lb.id.startswith("titulo-")
        ax.text(
            lb.position.x, lb.position.y, lb.text,
            ha="center", va="bottom",
            fontsize=style.title_font_size if is_title else style.font_size - 1,
        )
        ys.append(lb.position.y + 0.3)

    if xs:
        span = max(1.0, max(xs) - min(xs))
        ax.set_xlim(min(xs) - 0.05 * span, max(xs) + 0.05 * span)
    if ys:
        ax.set_ylim(min(ys) - 0.3, max(ys) + 0.3)

    ax.set_xlabel("x [m]")
    ax.set_yticks([])
    ax.grid(True, alpha=0.25)
