# station_export/core/lifespan.py
from contextlib import asynccontextmanager

import fitz  # PyMuPDF
import docx

from station_export.config import settings
from station_export.services.exporter import SUPPORTED_FORMATS
from station_export.utils.logging import logger


@asynccontextmanager
async def lifespan(app):
    """Run setup and teardown logic for the app lifecycle."""

    # ---------- Startup ----------
    logger.info("Application starting", extra={
        "environment": settings.environment,
        "formats": list(SUPPORTED_FORMATS),
        "max_html_chars": settings.max_html_chars,
        "pymupdf_version": fitz.version[0],
        "python_docx_version": getattr(docx, "__version__", "unknown"),
    })

    # yield control to the running app
    yield

    # ---------- Shutdown ----------
    logger.info("Application shutting down")
