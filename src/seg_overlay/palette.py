from __future__ import annotations
import math
import random

Color = tuple[int, int, int]

CENTER = 128
WIDTH = 127

class ColorPalette:
    """
    Fixed, ordered RGB colors indexed by class id.
    Immutable after construction.
    """
    def __init__(self, colors: list[Color]):
        self._colors = tuple(tuple(int(v) for v in c) for c in colors)

    def __len__(self) -> int:
        return len(self._colors)

    def __getitem__(self, idx: int) -> Color:
        return self._colors[idx]

    def __iter__(self):
        return iter(self._colors)

    def bgr(self, idx: int) -> Color:
        r, g, b = self._colors[idx]
        return (b, g, r)

def gradient_colors(frequency1: float, frequency2: float, frequency3: float,
                    phase1: float, phase2: float, phase3: float, length: int) -> list[Color]:
    colors = []
    for i in range(length):
        red = round(math.sin(frequency1 * i + phase1) * WIDTH + CENTER)
        grn = round(math.sin(frequency2 * i + phase2) * WIDTH + CENTER)
        blu = round(math.sin(frequency3 * i + phase3) * WIDTH + CENTER)
        colors.append((red, grn, blu))
    return colors

def make_color_gradient(frequency1: float, frequency2: float, frequency3: float,
                        phase1: float, phase2: float, phase3: float, length: int,
                        seed: int | None = None) -> ColorPalette:
    """
    Sine-wave gradient, shuffled once.
    seed=None shuffles from OS entropy, so class colors differ between runs.
    """
    colors = gradient_colors(frequency1, frequency2, frequency3, phase1, phase2, phase3, length)
    random.Random(seed).shuffle(colors)
    return ColorPalette(colors)

def default_palette(length: int = 21, seed: int | None = None) -> ColorPalette:
    return make_color_gradient(0.2, 0.2, 0.2, 0, 2, 4, length, seed=seed)
