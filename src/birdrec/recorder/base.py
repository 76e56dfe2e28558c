"""Abstract recorder interface and shared data types."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from birdrec.constants import (
    AUDIO_CODEC,
    AUDIO_SOURCE,
    CONTAINER_FORMAT,
    DEFAULT_CHANNELS,
    DEFAULT_SAMPLE_RATE,
)


@dataclass(frozen=True)
class RecordingConfig:
    """Capture profile for a recording session.

    Source, container and codec are fixed; only the rate, channel count
    and input device can vary.
    """
    sample_rate: int = DEFAULT_SAMPLE_RATE
    channels: int = DEFAULT_CHANNELS
    dtype: str = "int16"
    device: Optional[int | str] = None
    source: str = AUDIO_SOURCE
    container: str = CONTAINER_FORMAT
    codec: str = AUDIO_CODEC


@dataclass
class RecordingResult:
    """Result of a completed recording session."""
    path: Path
    duration_seconds: float
    sample_rate: int
    channels: int
    device_name: str


class Recorder(ABC):
    """Abstract interface for audio recording.

    ``start`` prepares and starts capture in one call and raises
    :class:`~birdrec.errors.CaptureError` if either step fails.
    """

    @abstractmethod
    def start(self, output_path: Path, config: RecordingConfig) -> None:
        """Begin recording to the given path."""
        ...

    @abstractmethod
    def stop(self) -> RecordingResult:
        """Stop recording, release the device and finalize the file."""
        ...

    @abstractmethod
    def is_recording(self) -> bool:
        """Whether a recording is currently active."""
        ...
