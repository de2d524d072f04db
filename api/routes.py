"""
REST endpoints controlling the camera client.
"""
import logging
from typing import List

import cv2
from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from core.config import Settings
from core.live import CameraApp
from core.models import CaptureStatus, DetectionView
from core.presentation import to_views

router = APIRouter(prefix="/camera")
settings = Settings()
camera_app = CameraApp(settings)
logger = logging.getLogger(__name__)


@router.post("/start")
def camera_start():
    """
    Open the camera and start sending a frame every CAPTURE_INTERVAL seconds.

    Returns:
        dict: {"status": "started" | "already_running"}

    Raises:
        HTTPException: 503 with the user-facing alert when the camera is unavailable.
    """
    if camera_app.is_on:
        return {"status": "already_running"}
    logger.debug(f"[api] /camera/start index={settings.CAMERA_INDEX}")
    if not camera_app.start():
        raise HTTPException(status_code=503, detail=camera_app.last_alert)
    return {"status": "started"}

@router.post("/stop")
def camera_stop():
    if not camera_app.is_on:
        return {"status": "not_running"}
    camera_app.stop()
    return {"status": "stopped"}

@router.get("/status", response_model=CaptureStatus)
async def camera_status():
    return camera_app.status()

@router.get("/results", response_model=List[DetectionView])
async def camera_results():
    return to_views(camera_app.results)

@router.get("/snapshot")
def camera_snapshot():
    """
    Current composed view (nav bar, video + overlay, controls, results) as JPEG.
    """
    if camera_app.camera.latest_frame() is None:
        raise HTTPException(status_code=404, detail="No frame captured yet")
    ok, buf = cv2.imencode(".jpg", camera_app.snapshot())
    if not ok:
        logger.error("[api] snapshot encoding failed")
        raise HTTPException(status_code=500, detail="Snapshot encoding failed")
    return Response(content=buf.tobytes(), media_type="image/jpeg")
