# station_export/models.py
from pydantic import BaseModel, Field
from typing import List
from datetime import datetime

# ---------- Export API ----------
class ExportRequest(BaseModel):
    title: str = Field("", max_length=500)
    html_content: str = ""

class StatsRequest(BaseModel):
    html_content: str = ""

class DocumentStats(BaseModel):
    """Counts shown next to the editor; not used for layout."""
    word_count: int = 0
    character_count: int = 0
    reading_time_minutes: int = 0

class HealthResponse(BaseModel):
    status: str
    timestamp: datetime = Field(default_factory=datetime.now)
    environment: str
    formats: List[str]
