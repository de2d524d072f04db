
"""Run the camera window.

Usage:
    uvicorn api.main:app --port 8080  # (optional, HTTP control API)
    python scripts/live_overlay.py     # (camera window)

Press 's' to open/stop the camera, 'q' to quit the window.
"""
import logging
from core.config import Settings
from core.live import run_live_overlay

if __name__ == '__main__':
    s = Settings()
    logging.basicConfig(level=getattr(logging, s.LOG_LEVEL, logging.INFO))
    run_live_overlay(s)
