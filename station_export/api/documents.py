from fastapi import APIRouter, HTTPException
from station_export.config import settings
from station_export.models import DocumentStats, StatsRequest
from station_export.utils.text_stats import document_stats

router = APIRouter(prefix='/api/documents', tags=['documents'])


@router.post('/stats', response_model=DocumentStats)
def get_document_stats(req: StatsRequest):
    """Word count, character count and reading time for editor HTML."""
    if len(req.html_content) > settings.max_html_chars:
        raise HTTPException(
            status_code=413,
            detail=f"html_content exceeds {settings.max_html_chars} characters"
        )
    return document_stats(req.html_content)
