"""Screen controller: binds the record button to the session and rotator."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from birdrec.rotator import BirdEntry, ResultRotator
from birdrec.session import RecordingSession

logger = logging.getLogger(__name__)

IDLE_LABEL = "Press to Record"
RECORDING_LABEL = "Recording..."
START_BUTTON = "Start Recording"
STOP_BUTTON = "Stop Recording"


@dataclass(frozen=True)
class ScreenState:
    """Immutable snapshot of everything the screen renders."""
    recording: bool = False
    last_result: Optional[BirdEntry] = None

    @property
    def status_label(self) -> str:
        return RECORDING_LABEL if self.recording else IDLE_LABEL

    @property
    def button_label(self) -> str:
        return STOP_BUTTON if self.recording else START_BUTTON

    @property
    def show_result(self) -> bool:
        return not self.recording and self.last_result is not None


Listener = Callable[[ScreenState], None]


class ScreenController:
    """Drives one recording screen.

    Each ``press()`` toggles between starting and stopping a recording.
    Stopping always takes the next entry from the rotator, even when the
    capture itself failed to start. Listeners receive a new
    :class:`ScreenState` after every change.
    """

    def __init__(self, session: RecordingSession, rotator: ResultRotator | None = None):
        self._session = session
        self._rotator = rotator or ResultRotator()
        self._state = ScreenState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> ScreenState:
        return self._state

    @property
    def rotator(self) -> ResultRotator:
        return self._rotator

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*, call it with the current state, return an unsubscribe function."""
        self._listeners.append(listener)
        listener(self._state)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def press(self) -> ScreenState:
        if self._session.is_recording:
            self._session.stop()
            entry = self._rotator.next()
            logger.info("Showing %s (%s)", entry.name, entry.decibel_range)
            self._publish(ScreenState(recording=False, last_result=entry))
        else:
            self._session.start()
            self._publish(ScreenState(recording=True, last_result=None))
        return self._state

    def close(self) -> None:
        """Stop a live recording without advancing the rotator."""
        self._session.close()
        if self._state.recording:
            self._publish(ScreenState(recording=False, last_result=None))

    def _publish(self, state: ScreenState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
