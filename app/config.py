# app/config.py
import logging
import os
from pathlib import Path

from rich.logging import RichHandler

# Settings are read from the environment once at import time.

BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = BASE_DIR / "data"

PRODUCTS_FILE = os.getenv("PRODUCTS_FILE", str(DATA_DIR / "products.json"))
CARTS_FILE = os.getenv("CARTS_FILE", str(DATA_DIR / "carts.json"))

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 8080))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

_configured = False


def configure_logging(level: str = LOG_LEVEL) -> None:
    global _configured
    if _configured:
        return
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )
    _configured = True
