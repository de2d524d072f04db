"""
FastAPI application entrypoint.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
import api.routes as routes

logging.basicConfig(level=getattr(logging, routes.settings.LOG_LEVEL, logging.INFO))


@asynccontextmanager
async def lifespan(_app: FastAPI):
    yield
    # release the device if the server goes down mid-capture
    routes.camera_app.close()


app = FastAPI(title="Mask Guard Camera API", version="1.0.0", lifespan=lifespan)
app.include_router(routes.router)

@app.get("/health")
def health() -> dict:
    """
    Health check endpoint.

    Returns:
        dict: Simple status payload.
    """
    return {"status": "ok"}
