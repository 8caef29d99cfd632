# path: scripts/solve_demo.py
import os
import sys
import traceback

THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT = os.path.abspath(os.path.join(THIS_DIR, ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from viga_isostatica.services.logging_setup import setup_logging
logger = setup_logging()

def _excepthook(exctype, value, tb):
    msg = "".join(traceback.format_exception(exctype, value, tb))
    logger.error("Excepción no capturada:\n%s", msg)
    sys.__excepthook__(exctype, value, tb)

sys.excepthook = _excepthook

from viga_isostatica.domain.beam import BeamModel, Support
from viga_isostatica.domain.loads import PointLoad, DistributedLoad
from viga_isostatica.engine.solver import solve
from viga_isostatica.services.reporte import generar_reporte


model = BeamModel(
    id="V1",
    L_m=6.0,
    supports=(
        Support(id="A", x_m=0.0, kind="simple"),
        Support(id="B", x_m=6.0, kind="roller"),
    ),
    point_loads=(
        PointLoad(id="P1", x_m=2.0, P_kN=12.0, direction="down"),
    ),
    dist_loads=(
        DistributedLoad(id="q1", x1_m=3.0, x2_m=6.0, w1_kN_m=0.0, w2_kN_m=4.0, direction="down"),
    ),
)

res = solve(model)
print(generar_reporte(res))
