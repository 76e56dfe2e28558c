"""Audio recording backends."""

from birdrec.recorder.base import Recorder, RecordingConfig, RecordingResult
from birdrec.recorder.mock_recorder import MockRecorder

__all__ = [
    "Recorder",
    "RecordingConfig",
    "RecordingResult",
    "MockRecorder",
]
