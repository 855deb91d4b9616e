"""LiveLoop — drive an OverlayRenderer at display rate on a worker thread."""

from __future__ import annotations

import logging
import threading
import time
import weakref
from collections.abc import Sequence
from typing import TYPE_CHECKING, Callable, Optional

from pappascan.core.models import Detection, Frame
from pappascan.overlay.renderer import OverlayRenderer, RenderCommand

if TYPE_CHECKING:
    from pappascan.core.models import AnalysisResult, CalibrationContext
    from pappascan.pipeline import AnalysisPipeline

logger = logging.getLogger(__name__)

# (detections, width, height); None means the visual source disappeared
LiveInput = tuple[Sequence[Detection], Optional[int], Optional[int]]
LiveSource = Callable[[], Optional[LiveInput]]
LiveSink = Callable[[list[RenderCommand]], None]

_registry_lock = threading.Lock()
_active_loops: weakref.WeakKeyDictionary[OverlayRenderer, LiveLoop] = weakref.WeakKeyDictionary()


class LiveLoop:
    """Call ``renderer.advance()`` once per frame interval until stopped.

    At most one loop runs per renderer: starting a loop cancels whichever
    loop currently drives the same renderer. Stopping cancels the pending
    tick, waits for an in-flight tick to finish and leaves the renderer
    Idle with no particles.

    Args:
        renderer: Overlay renderer to drive.
        source: Returns the current (detections, width, height), or None
            once the visual source is gone.
        sink: Receives each tick's render commands.
        fps: Ticks per second.
        clock: Time source passed to ``advance``.
    """

    def __init__(
        self,
        renderer: OverlayRenderer,
        source: LiveSource,
        sink: LiveSink,
        fps: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if fps <= 0:
            raise ValueError(f"fps must be > 0, got {fps}")
        self._renderer = renderer
        self._source = source
        self._sink = sink
        self._interval = 1.0 / fps
        self._clock = clock
        self._cancel = threading.Event()
        self._thread: threading.Thread | None = None
        self._ticks = 0
        self.error: BaseException | None = None

    @property
    def renderer(self) -> OverlayRenderer:
        return self._renderer

    @property
    def ticks(self) -> int:
        """Number of ticks completed since the last start."""
        return self._ticks

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Cancel any loop on the same renderer, enter Live and begin ticking."""
        with _registry_lock:
            existing = _active_loops.get(self._renderer)
        if existing is not None:
            existing.stop()
        if self.running:
            self.stop()

        self._cancel = threading.Event()
        self._ticks = 0
        self.error = None
        self._thread = threading.Thread(
            target=self._run, args=(self._cancel,), name="pappascan-live", daemon=True,
        )
        # Registration and Live entry are atomic with respect to _release
        with _registry_lock:
            _active_loops[self._renderer] = self
            self._renderer.start_live()
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        """Cancel the loop and return the renderer to Idle."""
        self._cancel.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None
        self._release()

    def _release(self) -> None:
        # A loop that no longer owns the renderer must not touch its mode
        with _registry_lock:
            if _active_loops.get(self._renderer) is not self:
                return
            del _active_loops[self._renderer]
            self._renderer.stop_live()

    def _run(self, cancel: threading.Event) -> None:
        # First tick fires one interval after start
        while not cancel.wait(self._interval):
            try:
                current = self._source()
                if current is None:
                    logger.debug("Live source disappeared, stopping overlay loop")
                    break
                detections, width, height = current
                with self._renderer.lock:
                    # Checked under the lock so no tick lands after stop_live
                    if cancel.is_set():
                        break
                    commands = self._renderer.advance(
                        self._clock(), detections, width, height,
                    )
                self._ticks += 1
                self._sink(commands)
            except Exception as exc:
                self.error = exc
                logger.error("Overlay loop stopped by error: %s", exc, exc_info=True)
                break
        if not cancel.is_set():
            self._release()


def analysis_source(
    frames: Callable[[], Frame | None],
    pipeline: AnalysisPipeline,
    calibration: CalibrationContext,
    on_result: Callable[[AnalysisResult], None] | None = None,
) -> LiveSource:
    """Build a LiveSource that analyzes a fresh frame on every tick.

    Args:
        frames: Returns the current frame, or None once the source is gone.
        pipeline: Analysis pipeline for each frame.
        calibration: Declared disc diameter for the statistics.
        on_result: Optional callback receiving each tick's AnalysisResult.
    """

    def source() -> LiveInput | None:
        frame = frames()
        if frame is None:
            return None
        if not frame.is_available:
            return ([], None, None)
        result = pipeline.analyze(frame, calibration)
        if on_result is not None:
            on_result(result)
        return (result.detections, result.width, result.height)

    return source
