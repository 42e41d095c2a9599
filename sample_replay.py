"""
MandalaRotate - Sample Replay
Headless driver that feeds recorded pointer samples into a MandalaEngine.

A producer thread plays the samples at the input rate while a render thread
ticks the engine at the frame rate, the same two paths the GUI runs.
"""

import json
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from logging_utils import log_event
from mandala_engine import MandalaEngine


@dataclass(frozen=True)
class PointerSample:
    """Canvas-local pointer sample"""
    x: int
    y: int
    pressed: bool


def parse_samples(data) -> List[PointerSample]:
    """Accept a list of {"x", "y", "pressed"} dicts or [x, y, pressed] triples."""
    if isinstance(data, dict):
        data = data.get("samples", [])
    if not isinstance(data, list):
        raise ValueError("sample data must be a list")

    samples = []
    for i, entry in enumerate(data):
        if isinstance(entry, dict):
            x, y, pressed = entry.get("x"), entry.get("y"), entry.get("pressed", True)
        elif isinstance(entry, (list, tuple)) and len(entry) == 3:
            x, y, pressed = entry
        else:
            raise ValueError(f"sample {i} is not a dict or [x, y, pressed] triple: {entry!r}")
        try:
            samples.append(PointerSample(int(x), int(y), bool(pressed)))
        except (TypeError, ValueError) as e:
            raise ValueError(f"sample {i} has invalid coordinates: {entry!r}") from e
    return samples


def load_samples(path: Union[str, Path]) -> List[PointerSample]:
    with open(path, 'r', encoding='utf-8') as f:
        return parse_samples(json.load(f))


class SampleReplayer:
    """Replays samples on a producer thread while a render thread ticks the engine"""

    def __init__(self, engine: MandalaEngine, samples: List[PointerSample], *,
                 input_interval_s: float = 0.017,
                 frame_interval_s: float = 0.017):
        self.engine = engine
        self.samples = list(samples)
        self.input_interval_s = max(0.0, input_interval_s)
        self.frame_interval_s = max(0.001, frame_interval_s)

        self.running = False
        self.frames = 0
        self.samples_played = 0
        self._producer: Optional[threading.Thread] = None
        self._renderer: Optional[threading.Thread] = None
        self._producer_done = threading.Event()

    def start(self) -> None:
        """Play the samples from the first one; counters restart with each run."""
        if self.running:
            return
        self.running = True
        self.frames = 0
        self.samples_played = 0
        self._producer_done.clear()
        self._renderer = threading.Thread(target=self._render_loop, daemon=True)
        self._producer = threading.Thread(target=self._input_loop, daemon=True)
        self._renderer.start()
        self._producer.start()
        log_event("INFO", "Replay", "Started", samples=len(self.samples))

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until all samples are played; returns False on timeout."""
        return self._producer_done.wait(timeout)

    def stop(self) -> None:
        self.running = False
        for thread in (self._producer, self._renderer):
            if thread is not None and thread is not threading.current_thread():
                thread.join(timeout=2.0)
        log_event("INFO", "Replay", "Stopped", frames=self.frames, samples=self.samples_played)

    def run(self) -> None:
        """Play every sample, stop both threads, then end any open stroke."""
        self.start()
        self.wait()
        self.stop()
        self.engine.handle_sample(0, 0, False)

    def _input_loop(self) -> None:
        try:
            for sample in self.samples:
                if not self.running:
                    break
                self.engine.handle_sample(sample.x, sample.y, sample.pressed)
                self.samples_played += 1
                if self.input_interval_s:
                    time.sleep(self.input_interval_s)
        finally:
            self._producer_done.set()

    def _render_loop(self) -> None:
        while self.running:
            self.engine.render_tick()
            self.frames += 1
            time.sleep(self.frame_interval_s)
