"""In-memory recorder for running sessions without a microphone."""

from __future__ import annotations

import wave
from pathlib import Path

import numpy as np

from birdrec.constants import SAMPLE_WIDTH
from birdrec.errors import CaptureError
from birdrec.recorder.base import Recorder, RecordingConfig, RecordingResult


class MockRecorder(Recorder):
    """Writes a fixed clip on start and can be told to fail either transition.

    Args:
        audio_data: int16 PCM to write. Silence of ``duration`` seconds if None.
        duration: Length of the generated silence.
        fail_on_start: Raise CaptureError from start(), as an unavailable
            microphone would.
        fail_on_stop: Raise OSError from stop() after releasing the device.
    """

    def __init__(
        self,
        audio_data: np.ndarray | None = None,
        duration: float = 2.0,
        fail_on_start: bool = False,
        fail_on_stop: bool = False,
    ):
        self._audio_data = audio_data
        self._duration = duration
        self._fail_on_start = fail_on_start
        self._fail_on_stop = fail_on_stop
        self._result: RecordingResult | None = None
        self.start_calls = 0
        self.stop_calls = 0

    def start(self, output_path: Path, config: RecordingConfig) -> None:
        if self._result is not None:
            raise RuntimeError("Already recording")

        self.start_calls += 1
        if self._fail_on_start:
            raise CaptureError("mock device unavailable")

        audio = self._audio_data
        if audio is None:
            audio = np.zeros(int(self._duration * config.sample_rate) * config.channels, dtype=np.int16)

        with wave.open(str(output_path), "wb") as wf:
            wf.setnchannels(config.channels)
            wf.setsampwidth(SAMPLE_WIDTH)
            wf.setframerate(config.sample_rate)
            wf.writeframes(audio.tobytes())

        self._result = RecordingResult(
            path=output_path,
            duration_seconds=len(audio) / (config.sample_rate * config.channels),
            sample_rate=config.sample_rate,
            channels=config.channels,
            device_name="mock",
        )

    def stop(self) -> RecordingResult:
        if self._result is None:
            raise RuntimeError("Not recording")

        self.stop_calls += 1
        result, self._result = self._result, None
        if self._fail_on_stop:
            raise OSError("mock device vanished")
        return result

    def is_recording(self) -> bool:
        return self._result is not None
