"""
Frame sampler helpers: BGR frame <-> JPEG data URI.
"""
from __future__ import annotations
import base64

import cv2
import numpy as np

DATA_URI_PREFIX = "data:image/jpeg;base64,"


def encode_frame(frame: np.ndarray, quality: int = 92) -> str:
    """JPEG-encode a frame at its native resolution as a data URI."""
    if frame is None or frame.size == 0:
        raise ValueError("Cannot encode an empty frame")
    ok, buf = cv2.imencode(".jpg", frame, [int(cv2.IMWRITE_JPEG_QUALITY), int(quality)])
    if not ok:
        raise RuntimeError("JPEG encoding failed")
    return DATA_URI_PREFIX + base64.b64encode(buf.tobytes()).decode("ascii")


def decode_data_uri(uri: str) -> np.ndarray:
    """Decode an image data URI (any image/* type OpenCV can read) into a BGR frame."""
    header, sep, payload = uri.partition(",")
    if not sep or not header.startswith("data:image/") or ";base64" not in header:
        raise ValueError("Not a base64 image data URI")
    raw = np.frombuffer(base64.b64decode(payload), dtype=np.uint8)
    frame = cv2.imdecode(raw, cv2.IMREAD_COLOR)
    if frame is None:
        raise ValueError("Data URI does not contain a decodable image")
    return frame
