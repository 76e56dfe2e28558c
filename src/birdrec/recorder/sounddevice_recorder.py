"""Microphone recorder using sounddevice (PortAudio)."""

from __future__ import annotations

import logging
import threading
import wave
from pathlib import Path

from birdrec.constants import SAMPLE_WIDTH
from birdrec.errors import CaptureError
from birdrec.recorder.base import Recorder, RecordingConfig, RecordingResult

logger = logging.getLogger(__name__)


class SounddeviceRecorder(Recorder):
    """Records audio from a sounddevice input stream to a WAV file."""

    def __init__(self):
        self._stream = None
        self._wav_file: wave.Wave_write | None = None
        self._config: RecordingConfig | None = None
        self._output_path: Path | None = None
        self._frames_written = 0
        self._sample_rate = 0
        self._recording = False
        self._lock = threading.Lock()

    def start(self, output_path: Path, config: RecordingConfig) -> None:
        if self._recording:
            raise RuntimeError("Already recording")

        try:
            self._prepare(output_path, config)
            self._stream.start()
        except Exception as e:
            self._release()
            raise CaptureError(f"Could not start microphone capture: {e}") from e

        self._recording = True
        logger.info("Capture started on %s at %d Hz", config.device or "default input", self._sample_rate)

    def _prepare(self, output_path: Path, config: RecordingConfig) -> None:
        """Open the WAV target and the input stream without starting it."""
        import sounddevice as sd

        # Use the device's native sample rate if none was requested
        sample_rate = config.sample_rate
        if not sample_rate:
            dev_info = sd.query_devices(config.device, kind="input")
            sample_rate = int(dev_info["default_samplerate"])

        self._config = config
        self._sample_rate = sample_rate
        self._output_path = output_path
        self._frames_written = 0

        self._wav_file = wave.open(str(output_path), "wb")
        self._wav_file.setnchannels(config.channels)
        self._wav_file.setsampwidth(SAMPLE_WIDTH)
        self._wav_file.setframerate(sample_rate)

        def callback(indata, frames, time_info, status):
            if status:
                logger.debug("Input stream status: %s", status)
            with self._lock:
                if self._wav_file is not None:
                    self._wav_file.writeframes(indata.tobytes())
                    self._frames_written += frames

        self._stream = sd.InputStream(
            samplerate=sample_rate,
            channels=config.channels,
            dtype=config.dtype,
            device=config.device,
            callback=callback,
        )

    def stop(self) -> RecordingResult:
        if not self._recording:
            raise RuntimeError("Not recording")

        self._recording = False
        self._release()

        duration = self._frames_written / self._sample_rate
        logger.info("Capture stopped after %.1fs", duration)

        return RecordingResult(
            path=self._output_path,
            duration_seconds=duration,
            sample_rate=self._sample_rate,
            channels=self._config.channels,
            device_name=str(self._config.device or "default"),
        )

    def _release(self) -> None:
        """Stop and close the stream and WAV file, whichever are open."""
        try:
            if self._stream is not None:
                try:
                    self._stream.stop()
                finally:
                    self._stream.close()
                    self._stream = None
        finally:
            with self._lock:
                if self._wav_file is not None:
                    self._wav_file.close()
                    self._wav_file = None

    def is_recording(self) -> bool:
        return self._recording
