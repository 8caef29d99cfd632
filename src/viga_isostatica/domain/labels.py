from __future__ import annotations

from typing import Literal

Direction = Literal["up", "down"]
SupportKind = Literal["simple", "roller", "fixed"]
ReactionKind = Literal["vertical", "moment"]
CriticalKind = Literal["zero", "discontinuity", "maximum", "minimum"]
DiagramLabel = Literal["shear", "moment"]

DIRECTIONS = ("up", "down")
SUPPORT_KINDS = ("simple", "roller", "fixed")

# Apoyos que solo aportan una reacción vertical
VERTICAL_ONLY_KINDS = frozenset({"simple", "roller"})

# Incógnitas de reacción por tipo de apoyo (2D)
UNKNOWNS_BY_KIND = {
    "simple": 1,
    "roller": 1,
    "fixed": 3,
}

DIAGRAM_NAMES = {
    "shear": "corte",
    "moment": "momento",
}


def sign_Fy(direction: str) -> float:
    """Fuerza vertical interna: +1 hacia arriba, -1 hacia abajo."""
    return 1.0 if direction == "up" else -1.0


def direction_of(value: float) -> Direction:
    return "up" if value >= 0 else "down"


def moment_about(force: float, distance: float, direction: str = "down") -> float:
    """
    Momento de una fuerza vertical respecto a un punto.
    Convención: antihorario positivo; una carga hacia abajo aporta momento negativo.
    """
    return sign_Fy(direction) * float(force) * float(distance)


def support_letter(index: int) -> str:
    """0 -> 'A', 1 -> 'B', ..."""
    return chr(ord("A") + int(index))


def redondear(value: float, decimals: int = 3) -> float:
    p = 10 ** decimals
    return round(float(value) * p) / p


def fmt(value: float, decimals: int = 3) -> str:
    """Formato fijo (sin notación científica) y recorte de ceros."""
    s = f"{redondear(value, decimals):.{decimals}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    if s == "-0":
        s = "0"
    return s


def fmt_term(value: float, decimals: int = 3) -> str:
    """Como fmt, pero entre paréntesis si es negativo (para escribir sumas)."""
    s = fmt(value, decimals)
    return f"({s})" if s.startswith("-") else s
