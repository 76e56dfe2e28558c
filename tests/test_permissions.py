"""Tests for the microphone permission gate."""

import sys
from unittest.mock import MagicMock, patch

import click
import pytest

from birdrec.errors import PermissionAlreadyRequested
from birdrec.permissions import (
    DevicePermissionProvider,
    PermissionGate,
    PermissionStatus,
    PromptPermissionProvider,
    StaticPermissionProvider,
    provider_for_mode,
)


class DeferredProvider(StaticPermissionProvider):
    """Holds the callback until resolve() is called, like an async dialog."""

    def request(self, capability, on_result):
        self.requests.append(capability)
        self.pending = on_result

    def resolve(self):
        self.pending(self.granted)


def test_granted():
    results = []
    gate = PermissionGate(StaticPermissionProvider(True))
    gate.request(results.append)
    assert results == [True]
    assert gate.granted
    assert gate.status is PermissionStatus.GRANTED


def test_denied():
    results = []
    gate = PermissionGate(StaticPermissionProvider(False))
    gate.request(results.append)
    assert results == [False]
    assert not gate.granted
    assert gate.status is PermissionStatus.DENIED


def test_requests_microphone_once():
    provider = StaticPermissionProvider(True)
    gate = PermissionGate(provider)
    gate.request()
    assert provider.requests == ["microphone"]

    with pytest.raises(PermissionAlreadyRequested):
        gate.request()
    assert provider.requests == ["microphone"]


def test_undecided_reads_as_denied():
    provider = DeferredProvider(True)
    gate = PermissionGate(provider)
    gate.request()
    assert not gate.resolved
    assert gate.status is PermissionStatus.DENIED
    assert not gate.granted

    provider.resolve()
    assert gate.resolved
    assert gate.granted


def test_prompt_provider_yes():
    results = []
    with patch("birdrec.permissions.click.confirm", return_value=True) as confirm:
        PromptPermissionProvider().request("microphone", results.append)
    assert results == [True]
    assert "microphone" in confirm.call_args[0][0]


def test_prompt_provider_abort_is_denial():
    results = []
    with patch("birdrec.permissions.click.confirm", side_effect=click.Abort()):
        PromptPermissionProvider().request("microphone", results.append)
    assert results == [False]


def test_device_provider_grants_with_input_device(monkeypatch):
    mock = MagicMock()
    mock.query_devices.return_value = {
        "name": "Built-in Microphone",
        "max_input_channels": 1,
        "default_samplerate": 44100.0,
        "hostapi": 0,
    }
    mock.query_hostapis.return_value = [{"name": "ALSA"}]
    mock.default.device = [0, 1]
    monkeypatch.setitem(sys.modules, "sounddevice", mock)

    results = []
    DevicePermissionProvider().request("microphone", results.append)
    assert results == [True]


def test_device_provider_denies_without_input_device(monkeypatch):
    mock = MagicMock()
    mock.PortAudioError = type("PortAudioError", (Exception,), {})
    mock.query_devices.side_effect = mock.PortAudioError("no default input")
    monkeypatch.setitem(sys.modules, "sounddevice", mock)

    results = []
    DevicePermissionProvider().request("microphone", results.append)
    assert results == [False]


@pytest.mark.parametrize("mode,expected", [
    ("allow", StaticPermissionProvider),
    ("deny", StaticPermissionProvider),
    ("ask", PromptPermissionProvider),
    ("device", DevicePermissionProvider),
])
def test_provider_for_mode(mode, expected):
    assert isinstance(provider_for_mode(mode), expected)


def test_provider_for_mode_static_decisions():
    assert provider_for_mode("allow").granted is True
    assert provider_for_mode("deny").granted is False


def test_provider_for_unknown_mode():
    with pytest.raises(ValueError, match="Unknown permission mode"):
        provider_for_mode("maybe")
