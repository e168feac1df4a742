from __future__ import annotations
from dataclasses import dataclass

@dataclass(frozen=True)
class FrameGeometry:
    width: int = 0
    height: int = 0
    rotation_degrees: int = 0

    @property
    def is_rotated(self) -> bool:
        return self.rotation_degrees % 180 == 90

    def effective_size(self) -> tuple[int, int]:
        if self.is_rotated:
            return self.height, self.width
        return self.width, self.height

@dataclass(frozen=True)
class Letterbox:
    rotated: bool
    multiplier: float
    w: float
    h: float

def _div(a: float, b: float) -> float:
    # zero-sized frames give inf/nan instead of raising
    if b == 0:
        return float("nan") if a == 0 else float("inf")
    return a / float(b)

def _extent(v: float) -> float:
    return float(int(v)) if v == v and abs(v) != float("inf") else v

def letterbox(geom: FrameGeometry, surface_w: int, surface_h: int) -> Letterbox:
    """
    Largest uniform scale that fits the (possibly rotated) frame inside the surface.
    """
    eff_w, eff_h = geom.effective_size()
    multiplier = min(_div(surface_h, eff_h), _div(surface_w, eff_w))
    w = _extent(multiplier * eff_w)
    h = _extent(multiplier * eff_h)
    return Letterbox(rotated=geom.is_rotated, multiplier=multiplier, w=w, h=h)
