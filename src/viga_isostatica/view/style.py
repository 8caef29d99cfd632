from __future__ import annotations
from dataclasses import dataclass

@dataclass(frozen=True)
class RenderStyle:
    beam_lw: float = 4.0
    beam_color: str = "black"

    arrow_lw: float = 1.0
    arrow_scale: float = 11.0
    load_color: str = "red"
    reaction_color: str = "green"

    dist_rect_lw: float = 0.9
    dist_rect_alpha: float = 0.12

    support_size: float = 0.25      # m (lado del triángulo)
    support_color: str = "blue"

    # Alturas en metros
    arrow_height: float = 0.8
    dist_height: float = 0.5

    shear_color: str = "#dc2626"
    moment_color: str = "#2563eb"
    diagram_lw: float = 1.5

    font_size: int = 10
    title_font_size: int = 12
