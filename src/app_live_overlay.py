from __future__ import annotations
import argparse
from pathlib import Path
import cv2

from seg_overlay.canvas import Canvas, blend
from seg_overlay.factory import load_config, build_renderer
from seg_overlay.feed import ResultsFeed, load_results
from seg_overlay.video import VideoStream

WINDOW = "Segmentation Overlay"

def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--config", default="config.yaml")
    p.add_argument("--source", default="", help="override video.source")
    p.add_argument("--results", default="", help="override results.path")
    return p.parse_args()

def main():
    args = parse_args()
    cfg = load_config(args.config)
    if args.source:
        cfg["video"]["source"] = args.source
    if args.results:
        cfg["results"]["path"] = args.results

    results_path = cfg["results"].get("path")
    if not results_path or not Path(results_path).exists():
        raise RuntimeError(f"Results file not found: {results_path}")
    recorded = load_results(results_path)
    print(f"[FEED] {len(recorded)} results from {results_path}, grid {recorded[0].shape}")

    vs = VideoStream(
        source=str(cfg["video"].get("source", "0")),
        fps_target=int(cfg["video"].get("fps_target", 0)),
        resize_width=int(cfg["video"].get("resize_width", 0)),
        rotation_degrees=int(cfg["video"].get("rotation_degrees", 0)),
    )
    renderer = build_renderer(cfg)
    alpha = float(cfg["overlay"].get("alpha", 0.5))

    feed = ResultsFeed(
        renderer,
        recorded,
        period_s=float(cfg["results"].get("period_s", 0.1)),
        loop=bool(cfg["results"].get("loop", True)),
    )

    out_dir = Path(cfg["outputs"].get("out_dir", "outputs"))
    out_dir.mkdir(parents=True, exist_ok=True)
    writer = None

    pkt = vs.read()
    if pkt is None:
        raise RuntimeError("No frames available")
    geom = vs.geometry()
    renderer.set_frame_configuration(geom.width, geom.height, geom.rotation_degrees)
    feed.start()

    if cfg["outputs"].get("save_annotated_video"):
        h, w = pkt.frame_bgr.shape[:2]
        fourcc = cv2.VideoWriter_fourcc(*"mp4v")
        writer = cv2.VideoWriter(str(out_dir / "annotated_live.mp4"), fourcc, vs.output_fps(), (w, h))

    cv2.namedWindow(WINDOW, cv2.WINDOW_NORMAL)
    try:
        while pkt is not None:
            g = vs.geometry()
            if g != geom:
                geom = g
                renderer.set_frame_configuration(g.width, g.height, g.rotation_degrees)
                print(f"[VIDEO] reconfigured to {g.width}x{g.height} rot {g.rotation_degrees}")

            frame = pkt.frame_bgr
            layer = Canvas.blank(frame.shape[1], frame.shape[0])
            renderer.draw(layer)
            vis = blend(frame, layer.image, alpha)

            if writer is not None:
                writer.write(vis)

            cv2.imshow(WINDOW, vis)
            k = cv2.waitKey(1) & 0xFF
            if k == 27:
                break
            pkt = vs.read()
    finally:
        feed.stop()
        vs.release()
        if writer is not None:
            writer.release()
        cv2.destroyAllWindows()
    print(f"[FEED] pushed {feed.pushed} results")

if __name__ == "__main__":
    main()
