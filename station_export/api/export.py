from fastapi import APIRouter, HTTPException, Response
from station_export.config import settings
from station_export.models import ExportRequest
from station_export.services.exporter import SUPPORTED_FORMATS, export_document
from station_export.services.exporters import ExportError
from station_export.utils.logging import logger
from station_export.utils.metrics import EXPORT_REQUESTS

router = APIRouter(prefix='/api/export', tags=['export'])


@router.post('/{fmt}')
async def export_file(fmt: str, req: ExportRequest):
    """
    Export editor HTML to a downloadable file.

    Args:
        fmt: Export format ('docx', 'pdf', 'md' or 'html')
        req: Title and editor HTML

    Returns:
        File download (attachment)
    """
    fmt = fmt.lower()
    if fmt not in SUPPORTED_FORMATS:
        raise HTTPException(status_code=400, detail=f"unsupported format: {fmt}")
    if len(req.html_content) > settings.max_html_chars:
        raise HTTPException(
            status_code=413,
            detail=f"html_content exceeds {settings.max_html_chars} characters"
        )

    EXPORT_REQUESTS.labels(format=fmt).inc()
    logger.info("Export request", extra={
        "export_format": fmt,
        "title": req.title,
        "html_chars": len(req.html_content),
    })

    try:
        content, filename, content_type = await export_document(req.title, req.html_content, fmt)
    except ExportError as e:
        logger.error("Export failed", extra={"export_format": fmt, "error": str(e)})
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.exception("Unexpected export failure", extra={"export_format": fmt})
        raise HTTPException(status_code=500, detail=f"Failed to export document: {str(e)}")

    return Response(
        content=content,
        media_type=content_type,
        headers={'Content-Disposition': f'attachment; filename="{filename}"'}
    )
