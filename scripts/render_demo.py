# path: scripts/render_demo.py
import os
import sys

THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT = os.path.abspath(os.path.join(THIS_DIR, ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from viga_isostatica.services.logging_setup import setup_logging
logger = setup_logging()

from viga_isostatica.domain.beam import BeamModel, Support
from viga_isostatica.domain.loads import PointLoad, DistributedLoad
from viga_isostatica.view.projector import solve_and_project
from viga_isostatica.view.renderer_scene import render_scene, render_diagrams
from viga_isostatica.services.memoria_calculo_pdf import export_memoria_pdf, MemoriaHeader

OUT = os.path.join(ROOT, "out")
os.makedirs(OUT, exist_ok=True)

model = BeamModel(
    id="V2",
    L_m=8.0,
    supports=(
        Support(id="A", x_m=1.0, kind="simple"),
        Support(id="B", x_m=7.0, kind="roller"),
    ),
    point_loads=(
        PointLoad(id="P1", x_m=0.0, P_kN=5.0, direction="down"),
        PointLoad(id="P2", x_m=4.0, P_kN=10.0, direction="down"),
    ),
    dist_loads=(
        DistributedLoad(id="q1", x1_m=4.0, x2_m=8.0, w1_kN_m=2.0, w2_kN_m=2.0, direction="down"),
    ),
)

res, proj = solve_and_project(model)
if not res.is_valid:
    logger.error("Modelo inválido: %s", "; ".join(res.errors))
    sys.exit(1)

fig, ax = plt.subplots(figsize=(10, 4))
render_scene(ax, proj.main_scene)
escena_png = os.path.join(OUT, "escena.png")
fig.savefig(escena_png, dpi=120, bbox_inches="tight")
plt.close(fig)

fig, ax = plt.subplots(figsize=(10, 6))
render_diagrams(ax, proj.diagram_scene)
diag_png = os.path.join(OUT, "diagramas.png")
fig.savefig(diag_png, dpi=120, bbox_inches="tight")
plt.close(fig)

pdf = os.path.join(OUT, "memoria.pdf")
export_memoria_pdf(
    pdf,
    header=MemoriaHeader(titulo="Memoria de cálculo - Viga V2"),
    model=model,
    result=res,
    imagenes={"escena": escena_png, "diagramas": diag_png},
)
logger.info("Archivos generados en %s", OUT)
