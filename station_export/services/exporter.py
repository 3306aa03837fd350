"""Export entry points: format dispatch and worker-thread offload.

Design choices:
- One exporter class per format, selected by name; a fresh instance per call.
- Rendering is CPU-bound and synchronous, so async callers go through
  export_document, which runs it with asyncio.to_thread.
"""
from __future__ import annotations
import asyncio
import time
from typing import Dict, Tuple, Type

from station_export.services.exporters import (
    BaseExporter,
    DocxExporter,
    ExportBuildError,
    HtmlExporter,
    ExportTaskError,
    MarkdownExporter,
    PdfExporter,
)
from station_export.utils.logging import logger
from station_export.utils.metrics import (
    EXPORT_BYTES_TOTAL,
    EXPORT_FAILURES,
    EXPORT_GENERATION_SECONDS,
)

EXPORTERS: Dict[str, Type[BaseExporter]] = {
    'docx': DocxExporter,
    'pdf': PdfExporter,
    'md': MarkdownExporter,
    'html': HtmlExporter,
}

SUPPORTED_FORMATS = tuple(EXPORTERS)


def get_exporter(fmt: str) -> BaseExporter:
    exporter_cls = EXPORTERS.get(fmt.lower())
    if exporter_cls is None:
        raise ValueError(f"unsupported format: {fmt!r} (expected one of {', '.join(SUPPORTED_FORMATS)})")
    return exporter_cls()


def export_bytes(title: str, html: str, fmt: str = 'pdf') -> Tuple[bytes, str, str]:
    """Return (bytes, filename, content_type) for given format: 'pdf'|'docx'|'md'|'html'"""
    exporter = get_exporter(fmt)
    start_time = time.time()
    try:
        content, filename, content_type = exporter.export(title, html)
    except ExportBuildError:
        EXPORT_FAILURES.labels(format=exporter.format, kind='build').inc()
        raise
    elapsed = time.time() - start_time

    EXPORT_GENERATION_SECONDS.labels(format=exporter.format).observe(elapsed)
    EXPORT_BYTES_TOTAL.inc(len(content))
    logger.info("Export generated", extra={
        "export_format": exporter.format,
        "bytes": len(content),
        "export_filename": filename,
        "elapsed_ms": int(elapsed * 1000),
    })
    return content, filename, content_type


async def export_document(title: str, html: str, fmt: str = 'pdf') -> Tuple[bytes, str, str]:
    """Run export_bytes on a worker thread so the event loop stays responsive.

    Raises:
        ValueError: Unknown format
        ExportBuildError: The renderer failed to serialize its output
        ExportTaskError: The offloaded computation failed for any other reason
    """
    get_exporter(fmt)  # reject unknown formats before scheduling any work
    try:
        return await asyncio.to_thread(export_bytes, title, html, fmt)
    except ExportBuildError:
        raise
    except Exception as e:
        EXPORT_FAILURES.labels(format=fmt.lower(), kind='task').inc()
        logger.exception("Export task failed", extra={"export_format": fmt})
        raise ExportTaskError(f"Export task failed: {e}") from e


__all__ = [
    'EXPORTERS',
    'SUPPORTED_FORMATS',
    'get_exporter',
    'export_bytes',
    'export_document',
]
