"""Overlay rendering for detection results.

- OverlayCanvas: transparent BGRA bitmap drawn over the video
- layout_box: normalized/pixel box -> rectangle + label anchor on the canvas
- render_detections: clear the canvas and draw the current result set

Rendering is pure; nothing here keeps state between calls apart from the canvas
pixels and its redraw counter.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import cv2
import numpy as np

from core.models import Detection

BOX_COLOR = (0, 0, 255, 255)   # red, opaque (BGRA)
BOX_THICKNESS = 3
LABEL_SCALE = 0.6
PIXEL_LIMIT = 32767             # cv2 drawing coordinates must fit in int32 math


def _px(v: float) -> int:
    return int(round(max(-PIXEL_LIMIT, min(PIXEL_LIMIT, v))))


@dataclass(frozen=True)
class BoxLayout:
    label: str
    x: float
    y: float
    width: float
    height: float
    label_x: float
    label_y: float

    def corners(self) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        return (_px(self.x), _px(self.y)), (_px(self.x + self.width), _px(self.y + self.height))


class OverlayCanvas:
    """Transparent drawing surface aligned with the video frame."""
    def __init__(self, width: int = 0, height: int = 0):
        self.pixels = np.zeros((max(0, int(height)), max(0, int(width)), 4), dtype=np.uint8)
        self.redraw_count = 0

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def resize(self, width: int, height: int) -> None:
        # like an HTML canvas, assigning a size always wipes it
        self.pixels = np.zeros((max(0, int(height)), max(0, int(width)), 4), dtype=np.uint8)

    def clear(self) -> None:
        self.pixels[:] = 0

    def is_blank(self) -> bool:
        return not self.pixels.any()

    def stroke_rect(self, layout: BoxLayout, color=BOX_COLOR, thickness: int = BOX_THICKNESS) -> None:
        if self.pixels.size == 0:
            return
        p0, p1 = layout.corners()
        cv2.rectangle(self.pixels, p0, p1, color, thickness)

    def fill_text(self, text: str, x: float, y: float, color=BOX_COLOR, scale: float = LABEL_SCALE) -> None:
        if self.pixels.size == 0 or not text:
            return
        cv2.putText(self.pixels, text, (_px(x), _px(y)),
                    cv2.FONT_HERSHEY_SIMPLEX, scale, color, 2, cv2.LINE_AA)

    def composite(self, frame: np.ndarray) -> np.ndarray:
        """Alpha-blend the overlay onto a BGR frame (returns a new image)."""
        out = frame.copy()
        if self.pixels.size == 0:
            return out
        h = min(out.shape[0], self.height)
        w = min(out.shape[1], self.width)
        over = self.pixels[:h, :w]
        alpha = over[:, :, 3:4].astype(np.float32) / 255.0
        base = out[:h, :w].astype(np.float32)
        out[:h, :w] = (over[:, :, :3].astype(np.float32) * alpha + base * (1.0 - alpha)).astype(np.uint8)
        return out


def is_normalized(box: Sequence[float]) -> bool:
    return all(float(v) <= 1 for v in box)


def layout_box(det: Detection, width: int, height: int,
               offset_x: float = 112, offset_h: float = -20) -> BoxLayout:
    """Map a detection box onto canvas pixels.

    Normalized boxes (all four values <= 1) are scaled by the canvas size;
    pixel boxes are used as-is. The rectangle is shifted by offset_x and its
    height adjusted by offset_h; the label is anchored on the unshifted start,
    10px above the box or 20px below its top edge when too close to the top.
    """
    x0, y0, x1, y1 = (float(v) for v in det.box)
    sx, sy = x0, y0
    sw, sh = x1 - x0, y1 - y0
    if is_normalized(det.box):
        sx *= width
        sy *= height
        sw *= width
        sh *= height
    return BoxLayout(
        label=det.label,
        x=sx + offset_x,
        y=sy,
        width=sw,
        height=sh + offset_h,
        label_x=sx,
        label_y=sy - 10 if sy > 10 else sy + 20,
    )


def render_detections(canvas: OverlayCanvas,
                      results: Optional[Iterable[Detection]],
                      frame_size: Optional[Tuple[int, int]] = None,
                      offset_x: float = 112,
                      offset_h: float = -20) -> List[BoxLayout]:
    """Redraw the whole canvas for the given result set; returns what was drawn.

    All layouts are computed before the canvas is touched, so a bad box leaves
    the previous drawing in place.
    """
    width, height = frame_size if frame_size is not None else (canvas.width, canvas.height)
    drawn = [layout_box(det, width, height, offset_x, offset_h) for det in results or []]

    if frame_size is not None:
        canvas.resize(*frame_size)
    else:
        canvas.clear()
    for layout in drawn:
        canvas.stroke_rect(layout)
        canvas.fill_text(layout.label, layout.label_x, layout.label_y)
    canvas.redraw_count += 1
    return drawn
