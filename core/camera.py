"""
Camera controller: acquires and releases the capture device.

start() never raises; a denied/missing device is logged and reported through
the return value so the caller can alert the user.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Optional, Tuple

import cv2
import numpy as np

from core.errors import CameraError
from core.models import CaptureSession

logger = logging.getLogger(__name__)


class CameraController:
    """Owns the capture device handle and the latest frame read from it."""
    def __init__(self, camera_index: int = 0):
        self.camera_index = int(camera_index)
        self._cap: Optional[cv2.VideoCapture] = None
        self._frame: Optional[np.ndarray] = None
        self._lock = threading.Lock()
        self._sessions = 0
        self.session: Optional[CaptureSession] = None

    @property
    def is_on(self) -> bool:
        return self.session is not None and self.session.active

    # ---- lifecycle ----
    def _open(self) -> cv2.VideoCapture:
        try:
            cap = cv2.VideoCapture(self.camera_index)
        except Exception as e:
            raise CameraError(f"Could not open camera index {self.camera_index}: {e}") from e
        if cap is None or not cap.isOpened():
            if cap is not None:
                cap.release()
            raise CameraError(f"Could not open camera index {self.camera_index}")
        return cap

    def start(self) -> bool:
        """Open the device. Returns False (state unchanged) when it cannot be acquired."""
        with self._lock:
            if self.is_on:
                return True
            try:
                cap = self._open()
            except CameraError:
                logger.exception("[camera] error accessing camera")
                return False
            self._cap = cap
            self._sessions += 1
            self.session = CaptureSession(
                session_id=self._sessions,
                camera_index=self.camera_index,
                started_at=time.time(),
            )
        logger.info(f"[camera] started index={self.camera_index} session={self._sessions}")
        return True

    def stop(self) -> None:
        with self._lock:
            cap, self._cap = self._cap, None
            self._frame = None
            was_on = self.is_on
            self.session = None
        if cap is not None:
            cap.release()
        if was_on:
            logger.info(f"[camera] stopped index={self.camera_index}")

    # ---- frames ----
    def read(self) -> Optional[np.ndarray]:
        """Grab the next frame and keep it as the latest one."""
        with self._lock:
            if self._cap is None:
                return None
            ok, frame = self._cap.read()
            if not ok or frame is None:
                return None
            self._frame = frame
            return frame

    def latest_frame(self) -> Optional[np.ndarray]:
        with self._lock:
            return None if self._frame is None else self._frame.copy()

    def frame_size(self) -> Optional[Tuple[int, int]]:
        """(width, height) of the video: latest frame, else the device's native size."""
        with self._lock:
            if self._frame is not None:
                h, w = self._frame.shape[:2]
                return w, h
            if self._cap is None:
                return None
            w = int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH) or 0)
            h = int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT) or 0)
        return (w, h) if w > 0 and h > 0 else None
