from __future__ import annotations
from pathlib import Path
import yaml

from seg_overlay.canvas import PaintStyle
from seg_overlay.labels import VOC_LABELS
from seg_overlay.palette import default_palette
from seg_overlay.renderer import OverlayRenderer, TEXT_SIZE_DIP

def load_config(path: str | Path) -> dict:
    path = Path(path)
    if not path.exists():
        raise RuntimeError(f"Config not found: {path}")
    cfg = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    for section in ("video", "results", "overlay", "outputs"):
        cfg.setdefault(section, {})
    return cfg

def build_renderer(cfg: dict) -> OverlayRenderer:
    ov = cfg.get("overlay", {})
    seed = ov.get("palette_seed")
    palette = default_palette(len(VOC_LABELS), seed=None if seed is None else int(seed))
    style = PaintStyle(
        fill=bool(ov.get("fill", True)),
        stroke_width=int(ov.get("stroke_width", 10)),
    )
    return OverlayRenderer(
        palette,
        labels=VOC_LABELS,
        density=float(ov.get("density", 1.0)),
        text_size_dip=float(ov.get("text_size_dip", TEXT_SIZE_DIP)),
        style=style,
        draw_labels=bool(ov.get("draw_labels", True)),
    )
