import math

from seg_overlay.palette import ColorPalette, default_palette, gradient_colors, make_color_gradient

def test_gradient_is_deterministic():
    a = gradient_colors(0.2, 0.2, 0.2, 0, 2, 4, 21)
    b = gradient_colors(0.2, 0.2, 0.2, 0, 2, 4, 21)
    assert a == b
    assert len(a) == 21

def test_gradient_formula():
    colors = gradient_colors(0.2, 0.2, 0.2, 0, 2, 4, 21)
    assert colors[0] == (128, 243, 32)
    i = 5
    expected = tuple(round(math.sin(0.2 * i + p) * 127 + 128) for p in (0, 2, 4))
    assert colors[i] == expected
    for c in colors:
        assert all(1 <= v <= 255 for v in c)

def test_shuffle_is_a_permutation():
    base = gradient_colors(0.2, 0.2, 0.2, 0, 2, 4, 21)
    pal = make_color_gradient(0.2, 0.2, 0.2, 0, 2, 4, 21)
    assert len(pal) == 21
    assert sorted(pal) == sorted(base)

def test_seed_makes_palette_reproducible():
    assert list(default_palette(21, seed=3)) == list(default_palette(21, seed=3))

def test_bgr_flips_channels():
    pal = ColorPalette([(10, 20, 30)])
    assert pal[0] == (10, 20, 30)
    assert pal.bgr(0) == (30, 20, 10)
