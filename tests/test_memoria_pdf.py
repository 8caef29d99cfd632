# path: tests/test_memoria_pdf.py
import os
import tempfile
from datetime import datetime

from viga_isostatica.domain.beam import BeamModel, Support
from viga_isostatica.domain.loads import PointLoad, DistributedLoad
from viga_isostatica.engine.solver import solve
from viga_isostatica.services.memoria_calculo_pdf import export_memoria_pdf, MemoriaHeader


def _model(supports=None):
    return BeamModel(
        id="V1",
        L_m=6.0,
        supports=supports or (Support("A", 0.0), Support("B", 6.0, "roller")),
        point_loads=(PointLoad("P1", 2.0, 12.0),),
        dist_loads=(DistributedLoad("q1", 3.0, 6.0, 0.0, 4.0),),
    )


def test_export_memoria_pdf_creates_file():
    with tempfile.TemporaryDirectory() as td:
        out = os.path.join(td, "memoria.pdf")
        model = _model()
        header = MemoriaHeader(titulo="Test Memoria", fecha=datetime.now())

        export_memoria_pdf(out, header=header, model=model, result=solve(model), imagenes={})
        assert os.path.exists(out)
        assert os.path.getsize(out) > 0


def test_export_memoria_pdf_invalid_result():
    with tempfile.TemporaryDirectory() as td:
        out = os.path.join(td, "memoria_invalida.pdf")
        model = _model(supports=(Support("A", 0.0),))
        res = solve(model)
        assert not res.is_valid

        export_memoria_pdf(out, MemoriaHeader(titulo="Inválida"), model, res,
                           imagenes={"escena": os.path.join(td, "no_existe.png")})
        assert os.path.getsize(out) > 0
