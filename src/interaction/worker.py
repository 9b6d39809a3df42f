"""
Background worker for hand tracking and interaction.
Runs in a separate QThread so the renderer's event loop never blocks.
"""
import time
from typing import Optional
from PyQt5.QtCore import QObject, pyqtSignal

from sensing.mock_source import MockHandSource

from .session import ExplorerSession


def create_source(config):
    """Landmark source for the configured input mode."""
    if config.input.mode == "mock":
        return MockHandSource(fps=config.input.mock_fps)
    from sensing.hand_tracker import HandTracker
    return HandTracker(config)


class ExplorerWorker(QObject):
    """
    Owns the landmark source and the session. Every tick reads at most one
    tracker result, runs it through the session and emits the outcome; the
    session state is only ever touched from this worker's thread.
    """
    # Signals
    frame_processed = pyqtSignal(object)  # Emits SessionFrame
    intent = pyqtSignal(object)           # Emits each Intent in order
    mode_changed = pyqtSignal(str)        # Emits InteractionMode name
    hand_lost = pyqtSignal()
    frame_ready = pyqtSignal(object)      # Emits BGR frame with landmarks
    error = pyqtSignal(str)

    def __init__(self, config, parent=None):
        super().__init__(parent)
        self._config = config
        self._source = None
        self._session: Optional[ExplorerSession] = None
        self._is_running = False
        self._reset_requested = False

    def start_process(self):
        """Main processing loop. Runs in worker thread."""
        self._source = create_source(self._config)
        self._session = ExplorerSession(self._config)

        if not self._source.start():
            self.error.emit("Could not open camera")
            return

        self._is_running = True

        if self._config.input.mode == "mock":
            target_fps = self._config.input.mock_fps
        else:
            target_fps = self._config.camera.fps
        min_interval = 1.0 / max(1, target_fps)
        preview_interval = 1.0 / 5  # Low FPS for landmark preview
        last_preview = 0.0
        last_mode = self._session.hsm.mode
        was_tracked = False

        try:
            while self._is_running:
                loop_start = time.perf_counter()

                if self._reset_requested:
                    self._reset_requested = False
                    self._session.reset()

                try:
                    landmarks = self._source.get_landmarks()
                except Exception as e:
                    # A bad frame from the tracker counts as a lost hand
                    print(f"Capture error: {e}")
                    landmarks = None

                frame = self._session.tick(landmarks, loop_start)
                output = frame.output

                for intent in output.intents:
                    self.intent.emit(intent)
                if output.mode != last_mode:
                    last_mode = output.mode
                    self.mode_changed.emit(output.mode.name)
                if was_tracked and not frame.hand.tracked:
                    self.hand_lost.emit()
                was_tracked = frame.hand.tracked

                self.frame_processed.emit(frame)

                if self._config.ui.debug_overlay and loop_start - last_preview >= preview_interval:
                    preview = self._source.get_frame_with_landmarks(landmarks, black_background=True)
                    if preview is not None:
                        self.frame_ready.emit(preview)
                    last_preview = loop_start

                elapsed = time.perf_counter() - loop_start
                sleep_time = min_interval - elapsed
                if sleep_time > 0:
                    time.sleep(sleep_time)

        except Exception as e:
            self.error.emit(f"Worker Exception: {str(e)}")
        finally:
            self._is_running = False
            if self._source:
                self._source.stop()

    def stop_process(self):
        """Signal the loop to stop; resources are released in the worker thread."""
        self._is_running = False

    def request_reset(self):
        """Ask the loop to reset the session before the next tick."""
        self._reset_requested = True
