import logging

from fastapi import FastAPI

from app.config import settings
from app.progress.router import router as progress_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Progress", version="0.1.0")
app.include_router(progress_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "progress": {
            "report": "/progress/report",
            "weight": "/progress/weight",
            "photos": "/progress/photos",
            "measurement_types": "/progress/measurement-types",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
