"""
Presentation: nav bar, start/stop control, results listing and the composed view.
"""
from __future__ import annotations
from typing import List, Optional, Sequence

import cv2
import numpy as np

from core.models import Detection, DetectionView
from core.overlay import OverlayCanvas

TITLE = "Mask Guard"
NAV_HEIGHT = 56
CONTROLS_HEIGHT = 64
LINE_HEIGHT = 22
PLACEHOLDER_SIZE = (640, 480)

NAV_BG = (246, 130, 59)        # blue-500 (BGR)
WHITE = (255, 255, 255)
TEXT = (30, 30, 30)
ALERT = (0, 0, 200)
FONT = cv2.FONT_HERSHEY_SIMPLEX


def confidence_of(label: str) -> Optional[str]:
    # Service labels look like "Mask: 97.31%"
    parts = label.split(": ")
    return parts[1] if len(parts) > 1 else None


def to_views(results: Optional[Sequence[Detection]]) -> List[DetectionView]:
    return [DetectionView(label=r.label, confidence=confidence_of(r.label), box=list(r.box))
            for r in results or []]


def format_results(results: Optional[Sequence[Detection]]) -> str:
    if results is None:
        return ""
    lines = ["Detection Results:"]
    for v in to_views(results):
        lines.append(f"Label: {v.label}")
        lines.append(f"Confidence: {v.confidence if v.confidence is not None else ''}")
        lines.append(f"Bounding Box: {', '.join(str(c) for c in v.box)}")
    return "\n".join(lines)


def _button(img: np.ndarray, text: str, x: int, y: int, bg, fg, scale: float = 0.6) -> int:
    """Draw a filled button with text; returns its right edge."""
    (tw, th), _ = cv2.getTextSize(text, FONT, scale, 1)
    pad_x, pad_y = 12, 8
    x1, y1 = x + tw + 2 * pad_x, y + th + 2 * pad_y
    cv2.rectangle(img, (x, y), (x1, y1), bg, -1)
    cv2.putText(img, text, (x + pad_x, y1 - pad_y), FONT, scale, fg, 1, cv2.LINE_AA)
    return x1


def draw_nav_bar(width: int) -> np.ndarray:
    """Title on the left, Login / Sign Up buttons on the right (display only)."""
    bar = np.zeros((NAV_HEIGHT, width, 3), dtype=np.uint8)
    bar[:] = NAV_BG
    cv2.putText(bar, TITLE, (16, 36), FONT, 0.8, WHITE, 2, cv2.LINE_AA)
    x = max(0, width - 200)
    x = _button(bar, "Login", x, 12, WHITE, NAV_BG) + 8
    _button(bar, "Sign Up", x, 12, WHITE, NAV_BG)
    return bar


def draw_controls(width: int, is_on: bool, alert: Optional[str] = None) -> np.ndarray:
    strip = np.full((CONTROLS_HEIGHT, width, 3), 255, dtype=np.uint8)
    label = "Stop Camera [s]" if is_on else "Open Camera [s]"
    (tw, _), _ = cv2.getTextSize(label, FONT, 0.7, 1)
    _button(strip, label, max(0, (width - tw) // 2 - 12), 10, NAV_BG, WHITE, scale=0.7)
    if alert:
        cv2.putText(strip, alert, (8, CONTROLS_HEIGHT - 6), FONT, 0.45, ALERT, 1, cv2.LINE_AA)
    return strip


def draw_results_panel(width: int, results: Optional[Sequence[Detection]]) -> np.ndarray:
    text = format_results(results)
    lines = text.splitlines() if text else []
    panel = np.full((LINE_HEIGHT * len(lines) + 8, width, 3), 255, dtype=np.uint8)
    for i, line in enumerate(lines):
        cv2.putText(panel, line, (12, LINE_HEIGHT * (i + 1)), FONT, 0.5, TEXT, 1, cv2.LINE_AA)
    return panel


def compose_view(frame: Optional[np.ndarray],
                 canvas: Optional[OverlayCanvas],
                 is_on: bool,
                 results: Optional[Sequence[Detection]] = None,
                 alert: Optional[str] = None) -> np.ndarray:
    """Stack nav bar, video (+overlay), controls and results into one BGR image."""
    if frame is None:
        w, h = PLACEHOLDER_SIZE
        video = np.full((h, w, 3), 32, dtype=np.uint8)
    else:
        video = canvas.composite(frame) if canvas is not None else frame.copy()
    width = video.shape[1]
    return np.vstack([
        draw_nav_bar(width),
        video,
        draw_controls(width, is_on, alert),
        draw_results_panel(width, results),
    ])
