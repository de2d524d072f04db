"""
Configuration for the camera client.
"""
from pydantic import BaseModel
import logging
import os

class Settings(BaseModel):
    """
    Runtime settings with environment-variable overrides.
    """
    CAMERA_INDEX: int = int(os.getenv("CAMERA_INDEX", "0"))

    DETECT_URL: str = os.getenv("DETECT_URL", "http://localhost:8000/detect-mask/")
    CAPTURE_INTERVAL: float = float(os.getenv("CAPTURE_INTERVAL", "1.0"))
    REQUEST_TIMEOUT: float = float(os.getenv("REQUEST_TIMEOUT", "10"))
    JPEG_QUALITY: int = int(os.getenv("JPEG_QUALITY", "92"))

    # Overlay alignment; defaults match the layout the overlay was tuned for
    BOX_OFFSET_X: int = int(os.getenv("BOX_OFFSET_X", "112"))
    BOX_OFFSET_H: int = int(os.getenv("BOX_OFFSET_H", "-20"))

    WINDOW_NAME: str = os.getenv("WINDOW_NAME", "Mask Guard")
    LOG_LEVEL: str = (os.getenv("LOG_LEVEL", "INFO") or "INFO")

    def __init__(self, **data):
        super().__init__(**data)
        object.__setattr__(self, "CAPTURE_INTERVAL", max(0.05, float(self.CAPTURE_INTERVAL)))
        object.__setattr__(self, "JPEG_QUALITY", max(1, min(100, int(self.JPEG_QUALITY))))
        # Normalize LOG_LEVEL: first word, upper-case, must be a known level name
        words = (self.LOG_LEVEL or "").strip().split()
        level = words[0].upper() if words else "INFO"
        if not isinstance(logging.getLevelName(level), int):
            level = "INFO"
        object.__setattr__(self, "LOG_LEVEL", level)
