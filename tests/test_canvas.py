import numpy as np
import pytest

from seg_overlay.canvas import Canvas, PaintStyle, blend

def test_filled_rect_writes_bgr():
    c = Canvas.blank(20, 10)
    assert (c.width, c.height) == (20, 10)
    c.draw_rect(2, 2, 6, 6, (255, 0, 10), PaintStyle())
    assert tuple(c.image[4, 4]) == (10, 0, 255)
    assert tuple(c.image[8, 15]) == (0, 0, 0)

def test_stroked_rect_leaves_center_empty():
    c = Canvas.blank(100, 100)
    c.draw_rect(10, 10, 90, 90, (0, 255, 0), PaintStyle(fill=False, stroke_width=4))
    assert c.image[50, 50].sum() == 0
    assert c.image[10, 50, 1] > 0

def test_rect_outside_surface_is_clipped():
    c = Canvas.blank(10, 10)
    c.draw_rect(-5, -5, 2, 2, (1, 2, 3), PaintStyle())
    assert tuple(c.image[0, 0]) == (3, 2, 1)

def test_text_paints_pixels():
    c = Canvas.blank(200, 60)
    c.draw_text("person", 5, 40, (255, 255, 255), 24)
    assert c.image.sum() > 0

def test_rejects_non_rgb_image():
    with pytest.raises(ValueError):
        Canvas(np.zeros((10, 10), dtype=np.uint8))

def test_blend_only_touches_painted_pixels():
    frame = np.full((4, 4, 3), 100, dtype=np.uint8)
    layer = np.zeros_like(frame)
    layer[0, 0] = (200, 200, 200)
    out = blend(frame, layer, 0.5)
    assert tuple(out[0, 0]) == (150, 150, 150)
    assert tuple(out[3, 3]) == (100, 100, 100)
    assert tuple(frame[0, 0]) == (100, 100, 100)

def test_blend_empty_layer_returns_copy():
    frame = np.full((4, 4, 3), 7, dtype=np.uint8)
    out = blend(frame, np.zeros_like(frame), 0.5)
    assert out is not frame
    assert np.array_equal(out, frame)

def test_text_y_is_top_of_glyphs():
    c = Canvas.blank(200, 200)
    c.draw_text("person", 5, 16, (255, 255, 255), 32)
    rows = np.nonzero(c.image.any(axis=2))[0]
    assert rows.min() > 0
    assert rows.min() >= 14
    assert rows.max() > 16 + 12
