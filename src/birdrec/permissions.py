"""One-shot microphone permission gate."""

from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

import click

from birdrec.constants import APP_NAME, MICROPHONE
from birdrec.errors import PermissionAlreadyRequested

logger = logging.getLogger(__name__)


class PermissionStatus(enum.Enum):
    GRANTED = "granted"
    DENIED = "denied"


class PermissionProvider(ABC):
    """Host-side answer to a capability request."""

    @abstractmethod
    def request(self, capability: str, on_result: Callable[[bool], None]) -> None:
        """Ask for *capability* and call *on_result* with the decision."""
        ...


class StaticPermissionProvider(PermissionProvider):
    """Answers every request with a fixed decision."""

    def __init__(self, granted: bool):
        self.granted = granted
        self.requests: list[str] = []

    def request(self, capability: str, on_result: Callable[[bool], None]) -> None:
        self.requests.append(capability)
        on_result(self.granted)


class PromptPermissionProvider(PermissionProvider):
    """Asks the user at the terminal, like a platform permission dialog."""

    def request(self, capability: str, on_result: Callable[[bool], None]) -> None:
        try:
            answer = click.confirm(f"Allow {APP_NAME} to access the {capability}?", default=True)
        except click.Abort:
            answer = False
        on_result(answer)


class DevicePermissionProvider(PermissionProvider):
    """Grants microphone access when a default input device can be opened."""

    def request(self, capability: str, on_result: Callable[[bool], None]) -> None:
        from birdrec.devices import get_default_device

        try:
            device = get_default_device()
        except OSError as e:
            logger.warning("Audio subsystem unavailable: %s", e)
            device = None
        on_result(device is not None)


class PermissionGate:
    """Requests the microphone capability exactly once per launch.

    Until the request resolves, and whenever it is denied, the gate reports
    DENIED. There is no re-prompt.
    """

    def __init__(self, provider: PermissionProvider, capability: str = MICROPHONE):
        self._provider = provider
        self._capability = capability
        self._status: Optional[PermissionStatus] = None
        self._requested = False

    def request(self, on_result: Callable[[bool], None] | None = None) -> None:
        if self._requested:
            raise PermissionAlreadyRequested(f"{self._capability} permission was already requested")
        self._requested = True

        def resolve(granted: bool) -> None:
            self._status = PermissionStatus.GRANTED if granted else PermissionStatus.DENIED
            logger.info("%s permission %s", self._capability, self._status.value)
            if on_result is not None:
                on_result(granted)

        self._provider.request(self._capability, resolve)

    @property
    def resolved(self) -> bool:
        return self._status is not None

    @property
    def status(self) -> PermissionStatus:
        return self._status or PermissionStatus.DENIED

    @property
    def granted(self) -> bool:
        return self._status is PermissionStatus.GRANTED


def provider_for_mode(mode: str) -> PermissionProvider:
    """Map a ``permissions.microphone`` config value to a provider."""
    if mode == "allow":
        return StaticPermissionProvider(True)
    if mode == "deny":
        return StaticPermissionProvider(False)
    if mode == "device":
        return DevicePermissionProvider()
    if mode == "ask":
        return PromptPermissionProvider()
    raise ValueError(f"Unknown permission mode: {mode!r}")
