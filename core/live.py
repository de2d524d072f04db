# core/live.py
"""
Live camera client.

CameraApp owns the UI state (camera on/off, current detection results, last
alert, overlay canvas) and runs a fixed-interval timer while capture is active:
- every CAPTURE_INTERVAL seconds the current frame is JPEG-encoded and posted
  to the detection service
- at most one request is in flight; firings while it is busy are dropped
- responses replace the result set wholesale and trigger one overlay redraw
- responses that belong to a stopped session are discarded

run_live_overlay opens an OpenCV window over a CameraApp:
- 's' toggles Open Camera / Stop Camera
- 'q' quits (camera is always released)
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional

import cv2
import numpy as np

from core.camera import CameraController
from core.client import DetectionClient
from core.config import Settings
from core.models import CaptureStatus, Detection
from core.overlay import OverlayCanvas, render_detections
from core.presentation import compose_view
from core.sampler import encode_frame

logger = logging.getLogger(__name__)

CAMERA_ALERT = "Unable to access the camera. Please check your permissions."


# -----------------------------------------------------------------------------
# CameraApp: capture session + timer + detection results + overlay
# -----------------------------------------------------------------------------
class CameraApp:
    """Camera controller, frame sampler, detection client and overlay wired together."""
    def __init__(self, settings: Settings,
                 camera: Optional[CameraController] = None,
                 client: Optional[DetectionClient] = None,
                 canvas: Optional[OverlayCanvas] = None):
        self.s = settings
        self.camera = camera or CameraController(settings.CAMERA_INDEX)
        self.client = client or DetectionClient(settings.DETECT_URL, timeout=settings.REQUEST_TIMEOUT)
        self.canvas = canvas or OverlayCanvas()
        self.last_alert: Optional[str] = None

        self._results: Optional[List[Detection]] = None
        self._session_id = 0
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="detect")
        self._pending: Optional[Future] = None
        self._timer_stop = threading.Event()
        self._timer_thread: Optional[threading.Thread] = None

    @property
    def is_on(self) -> bool:
        return self.camera.is_on

    @property
    def results(self) -> Optional[List[Detection]]:
        with self._lock:
            return None if self._results is None else list(self._results)

    # ---- lifecycle ----
    def start(self) -> bool:
        """Acquire the camera and start sampling. False (plus an alert) if denied."""
        if self.is_on:
            return True
        if not self.camera.start():
            self.last_alert = CAMERA_ALERT
            logger.error(f"[live] {CAMERA_ALERT}")
            return False
        with self._lock:
            self._session_id += 1
            self.last_alert = None
        self._start_timer()
        return True

    def stop(self) -> None:
        """Release the camera, clear the overlay and discard results."""
        self._stop_timer()
        self.camera.stop()
        with self._lock:
            self._session_id += 1
            self._results = None
            self.canvas.clear()
        logger.debug("[live] capture stopped; overlay and results cleared")

    def close(self) -> None:
        self.stop()
        self._executor.shutdown(wait=False)

    # ---- timer ----
    def _start_timer(self) -> None:
        self._timer_stop.clear()
        self._timer_thread = threading.Thread(target=self._timer_loop, name="capture-timer", daemon=True)
        self._timer_thread.start()

    def _stop_timer(self) -> None:
        self._timer_stop.set()
        t, self._timer_thread = self._timer_thread, None
        if t is not None and t is not threading.current_thread():
            t.join(timeout=2.0)

    def _timer_loop(self) -> None:
        """Keep the latest frame fresh; fire tick() every CAPTURE_INTERVAL seconds."""
        next_t = time.time() + self.s.CAPTURE_INTERVAL
        while not self._timer_stop.is_set():
            self.camera.read()
            now = time.time()
            if now >= next_t:
                self.tick()
                next_t = now + self.s.CAPTURE_INTERVAL
            self._timer_stop.wait(0.01)

    def tick(self) -> bool:
        """One timer firing. Returns True if a detection request was dispatched."""
        if not self.is_on:
            return False
        with self._lock:
            if self._pending is not None and not self._pending.done():
                logger.debug("[live] previous request still in flight; frame skipped")
                return False
            session_id = self._session_id
            self._pending = self._executor.submit(self.capture_and_detect, session_id)
            self._pending.add_done_callback(_log_unexpected)
        return True

    # ---- sampling + detection ----
    def capture_and_detect(self, session_id: Optional[int] = None) -> Optional[List[Detection]]:
        """Sample the current frame, send it, and apply the response."""
        if not self.is_on:
            return None
        if session_id is None:
            session_id = self._session_id

        frame = self.camera.latest_frame()
        if frame is None:
            frame = self.camera.read()
        if frame is None:
            logger.debug("[live] no frame available yet")
            return None

        try:
            data_uri = encode_frame(frame, self.s.JPEG_QUALITY)
            results = self.client.detect(data_uri)
        except (RuntimeError, ValueError):
            # prior results stay on screen
            logger.exception("[live] error sending frame to backend")
            return None

        with self._lock:
            if session_id != self._session_id or not self.is_on:
                logger.debug(f"[live] dropping response from stale session {session_id}")
                return None
            self._apply_results(results)
        return results

    def set_results(self, results: Optional[List[Detection]]) -> None:
        with self._lock:
            self._apply_results(results)

    def _apply_results(self, results: Optional[List[Detection]]) -> None:
        results = None if results is None else list(results)
        render_detections(self.canvas, results, self.camera.frame_size(),
                          offset_x=self.s.BOX_OFFSET_X, offset_h=self.s.BOX_OFFSET_H)
        self._results = results

    # ---- views ----
    def status(self) -> CaptureStatus:
        session = self.camera.session
        return CaptureStatus(
            running=self.is_on,
            started_at=session.started_at if session is not None else None,
            results=self.results,
            last_error=self.last_alert,
        )

    def snapshot(self) -> np.ndarray:
        """Composed presentation image: nav bar, video + overlay, controls, results."""
        frame = self.camera.latest_frame()
        with self._lock:
            return compose_view(frame, self.canvas, self.is_on, self._results, self.last_alert)


def _log_unexpected(fut: Future) -> None:
    if not fut.cancelled() and fut.exception() is not None:
        logger.error("[live] detection task failed", exc_info=fut.exception())


# -----------------------------------------------------------------------------
# Live camera window
# -----------------------------------------------------------------------------
def run_live_overlay(settings: Settings, camera_index: Optional[int] = None,
                     autostart: bool = False) -> None:
    """
    Open the Mask Guard window: live video with detection overlay, start/stop
    control and the results listing.

    Press 's' to open/stop the camera, 'q' to quit.
    """
    s = settings if camera_index is None else settings.model_copy(update={"CAMERA_INDEX": camera_index})
    app = CameraApp(s)
    logger.info(f"[live] window ready camera_index={s.CAMERA_INDEX} detect_url={s.DETECT_URL}")
    if autostart:
        app.start()

    try:
        while True:
            cv2.imshow(s.WINDOW_NAME, app.snapshot())
            key = cv2.waitKey(30) & 0xFF
            if key == ord("q"):
                break
            if key == ord("s"):
                if app.is_on:
                    app.stop()
                else:
                    app.start()
    finally:
        app.close()
        cv2.destroyAllWindows()
