"""CLI entry point for birdrec."""

import logging

import click

from birdrec import __version__

QUIT_KEYS = ("q", "Q", "\x03", "\x04", "")
TOGGLE_KEYS = ("\r", "\n", " ")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config():
    """Load config, following a storage.data_dir override if one is set."""
    from birdrec.config import BirdrecConfig
    from birdrec.paths import get_config_path, get_data_dir

    cfg = BirdrecConfig.load(get_config_path(get_data_dir()))
    config_path = get_config_path(get_data_dir(cfg.storage.data_dir))
    return BirdrecConfig.load(config_path), config_path


def _create_recorder(cfg):
    """Create the microphone recorder backend."""
    from birdrec.recorder.sounddevice_recorder import SounddeviceRecorder

    return SounddeviceRecorder()


def _parse_device(device):
    if device is None or device == "":
        return None
    device = str(device)
    return int(device) if device.isdigit() else device


def _toast(message: str) -> None:
    click.secho(f"  ({message})", dim=True)


def _render(state) -> None:
    """Draw the record screen for a ScreenState."""
    click.echo()
    click.secho(state.status_label, bold=True)
    if state.show_result:
        entry = state.last_result
        if entry.image:
            click.echo(f"  [{entry.image}]")
        click.secho(f"  Bird: {entry.name}", fg="yellow")
        click.secho(f"  Decibel Range: {entry.decibel_range}", fg="yellow")
    click.echo(f"[ {state.button_label} ]  Enter to toggle, q to quit")


@click.group()
@click.version_option(version=__version__, prog_name="birdrec")
@click.option("--verbose", "-v", is_flag=True, help="Show informational log messages.")
def main(verbose):
    """Record a clip and see which bird it was."""
    _configure_logging(verbose)


@main.command()
@click.option("--allow/--deny", "allow", default=None,
              help="Grant or refuse microphone access without asking.")
@click.option("--device", "-d", default=None, help="Audio input device name or index.")
def run(allow, device):
    """Open the record screen."""
    from birdrec.constants import BLOCKING_MESSAGE
    from birdrec.controller import ScreenController
    from birdrec.paths import ensure_dirs, get_cache_dir
    from birdrec.permissions import PermissionGate, provider_for_mode
    from birdrec.recorder import RecordingConfig
    from birdrec.session import RecordingSession

    cfg, _ = _load_config()

    if allow is None:
        mode = cfg.permissions.microphone
    else:
        mode = "allow" if allow else "deny"

    try:
        provider = provider_for_mode(mode)
    except ValueError as e:
        raise click.ClickException(str(e))

    gate = PermissionGate(provider)
    gate.request()
    if not gate.granted:
        click.echo(BLOCKING_MESSAGE)
        return

    cache_dir = get_cache_dir(cfg.storage.cache_dir)
    ensure_dirs(cache_dir)

    rec_config = RecordingConfig(
        sample_rate=cfg.recording.sample_rate,
        channels=cfg.recording.channels,
        device=_parse_device(device or cfg.recording.default_device),
    )
    session = RecordingSession(_create_recorder(cfg), cache_dir, rec_config, notify=_toast)
    controller = ScreenController(session)
    controller.subscribe(_render)

    try:
        while True:
            key = click.getchar()
            if key in QUIT_KEYS:
                break
            if key in TOGGLE_KEYS:
                controller.press()
    except (KeyboardInterrupt, EOFError):
        pass
    finally:
        controller.close()


@main.command()
def birds():
    """List the results in the order they are shown."""
    from birdrec.rotator import DEFAULT_TABLE

    click.echo(f"{'#':<3} {'Bird':<24} {'Decibels':>9}  {'Image'}")
    click.echo("-" * 52)
    seen = set()
    for i, entry in enumerate(DEFAULT_TABLE):
        repeat = "  (repeat)" if entry.name in seen else ""
        seen.add(entry.name)
        click.echo(f"{i:<3} {entry.name:<24} {entry.decibel_range:>9}  {entry.image or ''}{repeat}")


@main.command()
def devices():
    """List available audio input devices."""
    from birdrec.devices import list_devices

    try:
        devs = list_devices()
    except OSError as e:
        raise click.ClickException(str(e))

    if not devs:
        click.echo("No audio input devices found.")
        return

    click.echo(f"{'Idx':<5} {'Name':<45} {'Ch':>3} {'Rate':>7}  {'Host API'}")
    click.echo("-" * 80)
    for dev in devs:
        click.echo(
            f"{dev.index:<5} {dev.name:<45} {dev.max_input_channels:>3} "
            f"{dev.default_samplerate:>7.0f}  {dev.hostapi}"
        )


@main.command()
@click.argument("key", required=False)
@click.argument("value", required=False)
@click.option("--list", "list_all", is_flag=True, help="Show all configuration values.")
def config(key, value, list_all):
    """View or set configuration."""
    cfg, config_path = _load_config()

    if list_all or (key is None and value is None):
        for section_name, section_dict in cfg._to_dict().items():
            for k, v in section_dict.items():
                click.echo(f"{section_name}.{k} = {v!r}")
        return

    if value is None:
        try:
            click.echo(cfg.get(key))
        except KeyError as e:
            raise click.ClickException(str(e))
        return

    try:
        cfg.set(key, value)
    except (KeyError, ValueError) as e:
        raise click.ClickException(str(e))
    cfg.save(config_path)
    click.echo(f"Set {key} = {cfg.get(key)!r}")
