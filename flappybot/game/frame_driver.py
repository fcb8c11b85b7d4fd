# flappybot/game/frame_driver.py
from __future__ import annotations
import logging
from typing import Optional
from .config import REFERENCE_REFRESH_HZ, REFRESH_SAMPLE_WINDOW_MS

log = logging.getLogger(__name__)


class RefreshRateMeter:
    """
    Estimates the display refresh rate once, at startup:
    counts frames over a single sampling window, then freezes the value.
    Reports the reference rate until the window completes.
    """
    def __init__(self, window_ms: float = REFRESH_SAMPLE_WINDOW_MS,
                 default_hz: float = REFERENCE_REFRESH_HZ):
        self.window_ms = float(window_ms)
        self.rate = float(default_hz)
        self.measured = False
        self._start_ms: Optional[float] = None
        self._frames = 0

    def sample(self, now_ms: float) -> float:
        """Call once per presented frame. Returns the current estimate."""
        if self.measured:
            return self.rate
        if self._start_ms is None:
            self._start_ms = now_ms
            return self.rate
        self._frames += 1
        elapsed = now_ms - self._start_ms
        if elapsed >= self.window_ms:
            self.rate = self._frames * 1000.0 / elapsed
            self.measured = True
            log.info("measured refresh rate: %.1f Hz over %d frames", self.rate, self._frames)
        return self.rate
