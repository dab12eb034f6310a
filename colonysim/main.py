import logging

from fastapi import FastAPI

from colonysim.config import settings
from colonysim.routers import colonies

logging.basicConfig(level=settings.log_level)

app = FastAPI(
    title=settings.app_title,
    description="Per-colony population and economy simulation",
    version="0.1.0",
)

app.include_router(colonies.router)


@app.get("/health")
async def health_check():
    return {"status": "ok"}
