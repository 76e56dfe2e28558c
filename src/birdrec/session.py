"""Recording session lifecycle: temp file, capture start/stop, cleanup."""

from __future__ import annotations

import enum
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from birdrec.constants import TEMP_FILE_PREFIX, TEMP_FILE_SUFFIX
from birdrec.errors import SessionAlreadyActive
from birdrec.recorder.base import Recorder, RecordingConfig, RecordingResult

logger = logging.getLogger(__name__)


class RecordingState(enum.Enum):
    IDLE = "idle"
    RECORDING = "recording"


class StopStatus(enum.Enum):
    STOPPED = "stopped"
    CAPTURE_FAILED = "capture_failed"
    NOT_RECORDING = "not_recording"


@dataclass
class StopResult:
    status: StopStatus
    recording: Optional[RecordingResult] = None

    @property
    def completed_cycle(self) -> bool:
        """Whether this stop closed a start→stop cycle."""
        return self.status is not StopStatus.NOT_RECORDING


def _no_notify(message: str) -> None:
    pass


class RecordingSession:
    """Owns one capture at a time and the temp file it writes to.

    The session is a two-state machine. A failed capture start still moves
    it to RECORDING so that start and stop keep alternating; the failure is
    logged and reported by ``start()``'s return value and by ``stop()``.
    Backend errors on stop are logged too and end the session as failed.
    The temp file is removed when the session ends, whatever the outcome.
    """

    def __init__(
        self,
        recorder: Recorder,
        cache_dir: Path,
        config: RecordingConfig | None = None,
        notify: Callable[[str], None] = _no_notify,
    ):
        self._recorder = recorder
        self._cache_dir = cache_dir
        self._config = config or RecordingConfig()
        self._notify = notify
        self._state = RecordingState.IDLE
        self._output_path: Path | None = None
        self._capturing = False

    @property
    def state(self) -> RecordingState:
        return self._state

    @property
    def is_recording(self) -> bool:
        return self._state is RecordingState.RECORDING

    @property
    def output_path(self) -> Path | None:
        return self._output_path

    @property
    def capture_failed(self) -> bool:
        """True while RECORDING after a capture start that did not succeed."""
        return self.is_recording and not self._capturing

    def start(self) -> bool:
        """Start a new capture. Returns False if the backend failed to start."""
        if self._state is not RecordingState.IDLE:
            raise SessionAlreadyActive("A recording session is already active")

        self._cache_dir.mkdir(parents=True, exist_ok=True)
        fd, name = tempfile.mkstemp(
            prefix=TEMP_FILE_PREFIX, suffix=TEMP_FILE_SUFFIX, dir=self._cache_dir
        )
        os.close(fd)
        self._output_path = Path(name)
        self._state = RecordingState.RECORDING

        try:
            self._recorder.start(self._output_path, self._config)
        except Exception:
            logger.exception("Failed to start recording to %s", self._output_path)
            self._discard_output()
            return False

        self._capturing = True
        logger.debug("Recording to %s", self._output_path)
        self._notify("Recording started")
        return True

    def stop(self) -> StopResult:
        """End the current session. From IDLE this is a no-op."""
        if self._state is RecordingState.IDLE:
            logger.debug("stop() called with no active session")
            return StopResult(StopStatus.NOT_RECORDING)

        result = None
        try:
            if self._capturing:
                result = self._recorder.stop()
        except Exception:
            logger.exception("Failed to stop recording to %s", self._output_path)
        finally:
            self._capturing = False
            self._state = RecordingState.IDLE
            self._discard_output()

        self._notify("Recording stopped")
        if result is None:
            return StopResult(StopStatus.CAPTURE_FAILED)
        return StopResult(StopStatus.STOPPED, result)

    def close(self) -> None:
        """Release any live capture and its temp file."""
        if self.is_recording:
            self.stop()

    def _discard_output(self) -> None:
        if self._output_path is not None:
            self._output_path.unlink(missing_ok=True)
            self._output_path = None

    def __enter__(self) -> RecordingSession:
        return self

    def __exit__(self, *exc) -> None:
        self.close()
