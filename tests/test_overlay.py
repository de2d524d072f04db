
import numpy as np
import pytest
from core.models import Detection
from core.overlay import OverlayCanvas, is_normalized, layout_box, render_detections


def test_is_normalized():
    assert is_normalized([0.2, 0.2, 0.5, 0.6])
    assert is_normalized([0, 0, 1, 1])
    assert not is_normalized([0.2, 0.2, 1.5, 0.6])
    assert not is_normalized([50, 50, 200, 200])


def test_layout_normalized_box_scales_to_canvas():
    lay = layout_box(Detection(label="Mask", box=[0.2, 0.2, 0.5, 0.6]), 640, 480)
    assert lay.x == pytest.approx(0.2 * 640 + 112)
    assert lay.y == pytest.approx(0.2 * 480)
    assert lay.width == pytest.approx(0.3 * 640)
    assert lay.height == pytest.approx(0.4 * 480 - 20)
    # label anchored on the unshifted start, above the box
    assert (lay.label_x, lay.label_y) == (pytest.approx(128), pytest.approx(86))


def test_layout_pixel_box_is_not_scaled():
    lay = layout_box(Detection(label="No Mask", box=[50, 50, 200, 200]), 640, 480)
    assert (lay.x, lay.y, lay.width, lay.height) == (162, 50, 150, 130)
    assert (lay.label_x, lay.label_y) == (50, 40)


def test_layout_label_below_top_edge_near_frame_top():
    lay = layout_box(Detection(label="Mask", box=[20, 5, 100, 100]), 640, 480)
    assert lay.label_y == 25


def test_layout_custom_offsets():
    lay = layout_box(Detection(label="Mask", box=[50, 50, 200, 200]), 640, 480, offset_x=0, offset_h=0)
    assert (lay.x, lay.height) == (50, 150)


def test_render_resizes_clears_and_counts_one_redraw():
    canvas = OverlayCanvas(10, 10)
    canvas.pixels[:] = 255
    drawn = render_detections(canvas, [Detection(label="Mask", box=[50, 50, 200, 200])], (640, 480))
    assert (canvas.width, canvas.height) == (640, 480)
    assert canvas.redraw_count == 1
    assert len(drawn) == 1
    assert canvas.pixels[50, 200, 3] == 255   # top edge of the shifted rectangle
    assert canvas.pixels[300, 600, 3] == 0    # far from any box


def test_render_replaces_previous_boxes():
    canvas = OverlayCanvas(640, 480)
    render_detections(canvas, [Detection(label="A", box=[10, 50, 100, 150])])
    assert canvas.pixels[50, 150, 3] == 255
    render_detections(canvas, [Detection(label="B", box=[400, 300, 500, 400])])
    assert canvas.pixels[50, 150, 3] == 0
    assert canvas.pixels[300, 550, 3] == 255
    assert canvas.redraw_count == 2


def test_render_empty_results_leaves_blank_canvas():
    canvas = OverlayCanvas(64, 48)
    assert render_detections(canvas, None) == []
    assert canvas.is_blank()


def test_composite_blends_overlay_onto_frame():
    canvas = OverlayCanvas(64, 48)
    frame = np.zeros((48, 64, 3), dtype=np.uint8)
    render_detections(canvas, [Detection(label="", box=[0, 10, 20, 40])], offset_x=0, offset_h=0)
    out = canvas.composite(frame)
    assert out.shape == frame.shape
    assert tuple(out[10, 10]) == (0, 0, 255)
    assert not frame.any()


def test_render_clamps_huge_coordinates():
    canvas = OverlayCanvas(64, 48)
    drawn = render_detections(canvas, [Detection(label="Mask", box=[-1e300, 2, 1e300, 1e300])])
    assert len(drawn) == 1
    assert canvas.redraw_count == 1
