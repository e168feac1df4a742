from __future__ import annotations
from dataclasses import dataclass, field
import math
import threading
import numpy as np

from seg_overlay.canvas import PaintStyle
from seg_overlay.geometry import FrameGeometry, letterbox
from seg_overlay.labels import VOC_LABELS, BACKGROUND
from seg_overlay.palette import ColorPalette

TEXT_SIZE_DIP = 32
LABEL_LEFT = 5

class GridShapeError(ValueError):
    pass

@dataclass(frozen=True)
class Snapshot:
    geometry: FrameGeometry = FrameGeometry()
    results: np.ndarray | None = None
    timestamp: int = 0

@dataclass
class DrawStats:
    classes: list[int] = field(default_factory=list)
    cells: int = 0
    class_map: np.ndarray | None = None

def argmax_classes(scores: np.ndarray) -> np.ndarray:
    """
    Arg-max over the last axis, first index on ties.
    A NaN score never wins, except at index 0 where it is the running max
    and nothing compares greater.
    """
    scores = np.asarray(scores)
    nan = np.isnan(scores)
    if not nan.any():
        return np.argmax(scores, axis=-1)
    out = np.argmax(np.where(nan, -np.inf, scores), axis=-1)
    return np.where(nan[..., 0], 0, out)

def index_of_max(scores) -> int:
    arr = np.asarray(scores).reshape(-1)
    if arr.size == 0:
        return -1
    return int(argmax_classes(arr))

def validate_grid(results: np.ndarray, num_colors: int) -> tuple[int, int, int]:
    if results.ndim != 4:
        raise GridShapeError(f"expected [batch][row][col][class] scores, got shape {results.shape}")
    batch, rows, cols, classes = results.shape
    if batch < 1 or rows < 1 or cols < 1 or classes < 1:
        raise GridShapeError(f"empty axis in result shape {results.shape}")
    if classes > num_colors:
        raise GridShapeError(f"{classes} classes in result shape {results.shape} but palette has {num_colors} colors")
    return rows, cols, classes

class OverlayRenderer:
    """
    Paints per-cell arg-max classes of a segmentation grid onto a surface.

    Geometry and results live in one immutable Snapshot. The setters swap it
    under a short lock; draw() grabs the reference once and scans without it,
    so producer threads never wait on a full render.
    """
    def __init__(self, palette: ColorPalette, labels=VOC_LABELS, density: float = 1.0,
                 text_size_dip: float = TEXT_SIZE_DIP, style: PaintStyle | None = None,
                 draw_labels: bool = True):
        if len(palette) < len(labels):
            raise ValueError(f"palette has {len(palette)} colors for {len(labels)} labels")
        self.palette = palette
        self.labels = tuple(labels)
        self.text_size_px = float(text_size_dip) * float(density)
        self.style = style or PaintStyle()
        self.draw_labels = bool(draw_labels)

        self._lock = threading.Lock()
        self._snapshot = Snapshot()

    def set_frame_configuration(self, width: int, height: int, rotation_degrees: int):
        geom = FrameGeometry(int(width), int(height), int(rotation_degrees))
        with self._lock:
            self._snapshot = Snapshot(geom, self._snapshot.results, self._snapshot.timestamp)

    def track_results(self, results: np.ndarray, timestamp: int):
        with self._lock:
            self._snapshot = Snapshot(self._snapshot.geometry, results, timestamp)

    @property
    def snapshot(self) -> Snapshot:
        with self._lock:
            return self._snapshot

    @property
    def last_timestamp(self) -> int:
        return self.snapshot.timestamp

    def get_index_of_max(self, scores) -> int:
        return index_of_max(scores)

    def draw(self, surface) -> DrawStats:
        snap = self.snapshot
        stats = DrawStats()
        if snap.results is None:
            return stats

        results = np.asarray(snap.results)
        rows, cols, _ = validate_grid(results, len(self.palette))
        classes = argmax_classes(results[0])
        stats.class_map = classes
        lb = letterbox(snap.geometry, surface.width, surface.height)
        if not (math.isfinite(lb.w) and math.isfinite(lb.h)):
            return stats

        w, h = lb.w, lb.h
        xw = w / cols
        xh = h / rows

        ys, xs = np.nonzero(classes > BACKGROUND)
        for y, x in zip(ys.tolist(), xs.tolist()):
            pos = int(classes[y, x])
            cx = x / cols * w
            cy = y / rows * h
            surface.draw_rect(cx - xw, cy - xh, cx + xw, cy + xh, self.palette[pos], self.style)
        stats.cells = int(ys.size)
        stats.classes = [int(c) for c in np.unique(classes[ys, xs])]

        if self.draw_labels and stats.classes:
            self._draw_labels(surface, stats.classes)
        return stats

    def _draw_labels(self, surface, used: list[int]):
        large = max(surface.width, surface.height)
        small = min(surface.width, surface.height)
        skip = self.text_size_px
        y = (large - small) / 4 + skip / 2
        for i in used:
            name = self.labels[i] if i < len(self.labels) else f"class {i}"
            surface.draw_text(name, LABEL_LEFT, y, self.palette[i], skip)
            y += skip
