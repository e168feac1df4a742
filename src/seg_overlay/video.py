from __future__ import annotations
from dataclasses import dataclass
import time
import cv2
import numpy as np

from seg_overlay.geometry import FrameGeometry

ROTATE_CODES = {
    90: cv2.ROTATE_90_CLOCKWISE,
    180: cv2.ROTATE_180,
    270: cv2.ROTATE_90_COUNTERCLOCKWISE,
}

@dataclass
class FramePacket:
    frame_bgr: np.ndarray
    t: float
    idx: int

def rotate_frame(frame: np.ndarray, rotation_degrees: int) -> np.ndarray:
    code = ROTATE_CODES.get(int(rotation_degrees) % 360)
    if code is None:
        return frame
    return cv2.rotate(frame, code)

class VideoStream:
    """
    Supports webcam index, file path, or RTSP/HTTP.
    Optional FPS downsampling and resizing. Frames come out upright:
    the sensor rotation is undone after capture.
    """
    def __init__(self, source: str, fps_target: int = 0, resize_width: int = 0, rotation_degrees: int = 0):
        self.source = int(source) if source.isdigit() else source
        self.cap = cv2.VideoCapture(self.source)
        if not self.cap.isOpened():
            raise RuntimeError(f"Cannot open video source: {source}")

        self.native_fps = self.cap.get(cv2.CAP_PROP_FPS) or 0.0
        self.fps_target = fps_target
        self.resize_width = resize_width
        self.rotation_degrees = int(rotation_degrees)
        self.frame_idx = 0
        self._last_emit = 0.0
        self._raw_size = (0, 0)

    def _resize(self, frame):
        if self.resize_width and self.resize_width > 0:
            h, w = frame.shape[:2]
            if w != self.resize_width:
                scale = self.resize_width / float(w)
                nh = int(round(h * scale))
                frame = cv2.resize(frame, (self.resize_width, nh), interpolation=cv2.INTER_LINEAR)
        return frame

    def read(self) -> FramePacket | None:
        while True:
            ok, frame = self.cap.read()
            if not ok:
                return None

            frame = self._resize(frame)
            t = time.time()

            # fps downsample
            if self.fps_target and self.fps_target > 0 and self._last_emit > 0:
                if (t - self._last_emit) < (1.0 / self.fps_target):
                    self.frame_idx += 1
                    continue
            self._last_emit = t
            break

        h, w = frame.shape[:2]
        self._raw_size = (w, h)
        pkt = FramePacket(rotate_frame(frame, self.rotation_degrees), t, self.frame_idx)
        self.frame_idx += 1
        return pkt

    def geometry(self) -> FrameGeometry:
        """Sensor-side frame size plus the rotation the renderer must undo."""
        w, h = self._raw_size
        return FrameGeometry(w, h, self.rotation_degrees)

    def output_fps(self) -> float:
        if self.fps_target and self.fps_target > 0:
            return float(self.fps_target)
        return self.native_fps if self.native_fps > 0 else 25.0

    def release(self):
        self.cap.release()
