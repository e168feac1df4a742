import pytest

from seg_overlay.factory import build_renderer, load_config

def test_build_renderer_from_yaml(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text(
        "overlay:\n"
        "  density: 2.0\n"
        "  text_size_dip: 18\n"
        "  stroke_width: 4\n"
        "  fill: false\n"
        "  draw_labels: false\n"
        "  palette_seed: 11\n",
        encoding="utf-8",
    )
    cfg = load_config(p)
    assert cfg["video"] == {}
    r = build_renderer(cfg)
    assert r.text_size_px == pytest.approx(36.0)
    assert r.style.fill is False and r.style.stroke_width == 4
    assert r.draw_labels is False
    assert list(r.palette) == list(build_renderer(cfg).palette)
    assert r.labels[0] == "background" and len(r.labels) == 21

def test_missing_config_raises(tmp_path):
    with pytest.raises(RuntimeError):
        load_config(tmp_path / "nope.yaml")
