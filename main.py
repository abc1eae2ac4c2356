import logging

import uvicorn
from fastapi import FastAPI

from app.dependencies import settings
from app.logging_config import setup_logging
from app.routers import webhooks

setup_logging(settings.log_level)

logger = logging.getLogger("app.main")

app = FastAPI(title="Squarespace Chatwoot Relay")

# Include Routers
app.include_router(webhooks.router)


@app.get("/healthz")
def healthz():
    return {"status": "ok"}


def run():
    logger.info("Squarespace webhook listener starting on port %s", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
