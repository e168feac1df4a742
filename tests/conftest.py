import numpy as np
import pytest

from seg_overlay.palette import default_palette

class RecordingSurface:
    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.rects = []
        self.texts = []

    def draw_rect(self, left, top, right, bottom, color_rgb, style):
        self.rects.append(((left, top, right, bottom), color_rgb))

    def draw_text(self, text, x, y, color_rgb, size_px):
        self.texts.append((text, x, y, color_rgb, size_px))

@pytest.fixture
def palette():
    return default_palette(21, seed=7)

@pytest.fixture
def surface():
    return RecordingSurface(480, 360)

def one_hot_grid(class_map, num_classes=21):
    class_map = np.asarray(class_map)
    rows, cols = class_map.shape
    grid = np.zeros((1, rows, cols, num_classes), dtype=np.float32)
    for y in range(rows):
        for x in range(cols):
            grid[0, y, x, class_map[y, x]] = 1.0
    return grid
