from __future__ import annotations
from pathlib import Path
import threading
import time
import numpy as np

def _split(arr: np.ndarray) -> list[np.ndarray]:
    if arr.ndim == 4:
        return [arr.astype(np.float32, copy=False)]
    if arr.ndim == 5:
        return [a.astype(np.float32, copy=False) for a in arr]
    raise ValueError(f"expected 4-D or 5-D score array, got shape {arr.shape}")

def load_results(path: str | Path) -> list[np.ndarray]:
    """
    .npy: one [batch][row][col][class] array, or a stack of them along a leading frame axis.
    .npz: one array per key, replayed in sorted key order.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".npy":
        return _split(np.load(path))
    if suffix == ".npz":
        out = []
        with np.load(path) as data:
            for key in sorted(data.files):
                out.extend(_split(data[key]))
        return out
    raise ValueError(f"unsupported results file: {path}")

class ResultsFeed:
    """
    Replays recorded segmentation outputs into a renderer from its own thread,
    standing in for an inference engine.
    """
    def __init__(self, renderer, results: list[np.ndarray], period_s: float = 0.1, loop: bool = True):
        if not results:
            raise ValueError("ResultsFeed needs at least one result")
        self.renderer = renderer
        self.results = list(results)
        self.period_s = max(0.0, float(period_s))
        self.loop = bool(loop)
        self.pushed = 0
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self):
        if self._thread and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="ResultsFeed", daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 2.0):
        self._stop.set()
        t = self._thread
        if t:
            t.join(timeout=timeout)

    def is_alive(self) -> bool:
        return bool(self._thread and self._thread.is_alive())

    def _run(self):
        idx = 0
        while not self._stop.is_set():
            if idx >= len(self.results):
                if not self.loop:
                    break
                idx = 0
            self.renderer.track_results(self.results[idx], int(time.time() * 1000))
            self.pushed += 1
            idx += 1
            if self._stop.wait(self.period_s):
                break
