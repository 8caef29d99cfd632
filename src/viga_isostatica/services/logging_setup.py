# path: src/viga_isostatica/services/logging_setup.py
from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional, Union

LOGGER_NAME = "viga_isostatica"

# Variables de entorno para los scripts (sin tocar código)
ENV_LOG_DIR = "VIGA_LOG_DIR"
ENV_LOG_LEVEL = "VIGA_LOG_LEVEL"


def _resolve_level(level: Union[int, str, None]) -> int:
    """Acepta 10 / "DEBUG" / "debug"; nivel desconocido -> INFO."""
    if level is None:
        level = os.environ.get(ENV_LOG_LEVEL, "INFO")
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(
    log_dir: Optional[str] = None,
    log_name: str = "viga_isostatica.log",
    level: Union[int, str, None] = None,
    console: bool = True,
) -> logging.Logger:
    """
    Configura el logger raíz del paquete: archivo rotativo + consola opcional.
    Los módulos usan logging.getLogger(__name__) y propagan hasta aquí.

    log_dir / level: si son None se toman de VIGA_LOG_DIR / VIGA_LOG_LEVEL.
    """
    log_dir = log_dir or os.environ.get(ENV_LOG_DIR, "logs")
    lvl = _resolve_level(level)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(lvl)

    # Evitar duplicar handlers si se llama más de una vez
    if logger.handlers:
        return logger

    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, log_name)

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )

    fh = RotatingFileHandler(log_path, maxBytes=2_000_000, backupCount=3, encoding="utf-8")
    fh.setLevel(lvl)
    fh.setFormatter(fmt)
    logger.addHandler(fh)

    if console:
        sh = logging.StreamHandler()
        sh.setLevel(lvl)
        sh.setFormatter(fmt)
        logger.addHandler(sh)

    logger.info("Logging inicializado (%s). Archivo: %s", logging.getLevelName(lvl), log_path)
    return logger
