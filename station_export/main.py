# station_export/main.py
import os

from fastapi import FastAPI

from station_export.api import documents, export, health, metrics
from station_export.core.lifespan import lifespan
from station_export.core.middleware import setup_middleware


app = FastAPI(
    title="Station Export API",
    version="1.0.0",
    description="Export block-editor documents to DOCX, PDF, Markdown and HTML",
    lifespan=lifespan
)

# Setup middleware
setup_middleware(app)

# Register API routes
app.include_router(export.router)
app.include_router(documents.router)
app.include_router(health.router, tags=["health"])
app.include_router(metrics.router, tags=["metrics"])  # /metrics for Prometheus

# ---------- Run ----------

if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        log_level="info"
    )
