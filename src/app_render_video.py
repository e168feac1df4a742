from __future__ import annotations
import argparse
import csv
from pathlib import Path
import cv2
import numpy as np

from seg_overlay.canvas import Canvas, blend
from seg_overlay.factory import load_config, build_renderer
from seg_overlay.feed import load_results
from seg_overlay.video import VideoStream

def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--config", default="config.yaml")
    p.add_argument("--source", default="", help="override video.source")
    p.add_argument("--results", default="", help="override results.path")
    return p.parse_args()

def coverage_row(t: float, idx: int, class_map: np.ndarray, num_classes: int) -> list:
    counts = np.bincount(class_map.reshape(-1), minlength=num_classes)
    total = float(class_map.size)
    return [t, idx] + [round(c / total, 5) for c in counts[:num_classes]]

def main():
    args = parse_args()
    cfg = load_config(args.config)
    if args.source:
        cfg["video"]["source"] = args.source
    if args.results:
        cfg["results"]["path"] = args.results

    recorded = load_results(cfg["results"]["path"])

    vs = VideoStream(
        source=str(cfg["video"].get("source", "0")),
        # every recorded frame is rendered; downsampling would depend on decode speed
        fps_target=0,
        resize_width=int(cfg["video"].get("resize_width", 0)),
        rotation_degrees=int(cfg["video"].get("rotation_degrees", 0)),
    )
    renderer = build_renderer(cfg)
    alpha = float(cfg["overlay"].get("alpha", 0.5))

    out_dir = Path(cfg["outputs"].get("out_dir", "outputs"))
    out_dir.mkdir(parents=True, exist_ok=True)

    first = vs.read()
    if first is None:
        raise RuntimeError("No frames")
    h, w = first.frame_bgr.shape[:2]
    fourcc = cv2.VideoWriter_fourcc(*"mp4v")
    writer = cv2.VideoWriter(str(out_dir / "annotated.mp4"), fourcc, vs.output_fps(), (w, h))

    csv_f = None
    csv_w = None
    if cfg["outputs"].get("save_csv", True):
        csv_f = open(out_dir / "coverage.csv", "w", newline="", encoding="utf-8")
        csv_w = csv.writer(csv_f)
        csv_w.writerow(["t", "frame"] + list(renderer.labels))

    # one recorded result per frame; the last one holds once the recording runs out
    pkt = first
    frames = 0
    seen = set()
    while pkt is not None:
        g = vs.geometry()
        renderer.set_frame_configuration(g.width, g.height, g.rotation_degrees)
        res = recorded[min(pkt.idx, len(recorded) - 1)]
        renderer.track_results(res, int(pkt.t * 1000))

        layer = Canvas.blank(pkt.frame_bgr.shape[1], pkt.frame_bgr.shape[0])
        stats = renderer.draw(layer)
        seen.update(stats.classes)
        writer.write(blend(pkt.frame_bgr, layer.image, alpha))

        if csv_w is not None:
            csv_w.writerow(coverage_row(pkt.t, pkt.idx, stats.class_map, len(renderer.labels)))
        frames += 1
        pkt = vs.read()

    vs.release()
    writer.release()
    if csv_f is not None:
        csv_f.close()
    print(f"[OUTPUT] {frames} frames -> {(out_dir / 'annotated.mp4').resolve()}")
    print("Classes seen:")
    for c in sorted(seen):
        print(f"  {c:2d} {renderer.labels[c]}")

if __name__ == "__main__":
    main()
