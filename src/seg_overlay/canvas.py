from __future__ import annotations
from dataclasses import dataclass
import cv2
import numpy as np

FONT = cv2.FONT_HERSHEY_SIMPLEX

@dataclass(frozen=True)
class PaintStyle:
    fill: bool = True
    stroke_width: int = 10
    round_joins: bool = True

    @property
    def line_type(self) -> int:
        return cv2.LINE_AA if self.round_joins else cv2.LINE_8

class Canvas:
    """
    Drawing surface over an HxWx3 uint8 BGR image.
    Colors come in as RGB and are flipped for OpenCV.
    """
    def __init__(self, image: np.ndarray):
        if image.ndim != 3 or image.shape[2] != 3:
            raise ValueError(f"Canvas needs an HxWx3 image, got shape {image.shape}")
        self.image = image

    @classmethod
    def blank(cls, width: int, height: int) -> "Canvas":
        return cls(np.zeros((int(height), int(width), 3), dtype=np.uint8))

    @property
    def width(self) -> int:
        return int(self.image.shape[1])

    @property
    def height(self) -> int:
        return int(self.image.shape[0])

    def draw_rect(self, left: float, top: float, right: float, bottom: float,
                  color_rgb: tuple[int, int, int], style: PaintStyle):
        r, g, b = color_rgb
        p0 = (int(round(left)), int(round(top)))
        p1 = (int(round(right)), int(round(bottom)))
        if style.fill:
            cv2.rectangle(self.image, p0, p1, (b, g, r), -1)
        else:
            cv2.rectangle(self.image, p0, p1, (b, g, r), int(style.stroke_width), style.line_type)

    def draw_text(self, text: str, x: float, y: float, color_rgb: tuple[int, int, int], size_px: float):
        r, g, b = color_rgb
        thickness = max(1, int(size_px / 16))
        scale = cv2.getFontScaleFromHeight(FONT, max(1, int(size_px)), thickness)
        # y is the top of the text; putText wants the baseline
        (_tw, th), _baseline = cv2.getTextSize(text, FONT, scale, thickness)
        cv2.putText(self.image, text, (int(x), int(y) + th), FONT, scale, (b, g, r), thickness, cv2.LINE_AA)

def blend(frame: np.ndarray, layer: np.ndarray, alpha: float) -> np.ndarray:
    """Composite an overlay layer onto a frame wherever the layer holds paint."""
    if frame.shape != layer.shape:
        layer = cv2.resize(layer, (frame.shape[1], frame.shape[0]), interpolation=cv2.INTER_NEAREST)
    out = frame.copy()
    painted = np.any(layer > 0, axis=2)
    if not np.any(painted):
        return out
    mixed = cv2.addWeighted(frame, 1.0 - alpha, layer, alpha, 0.0)
    out[painted] = mixed[painted]
    return out
