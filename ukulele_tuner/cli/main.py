"""Main entry point for the Ukulele Tuner CLI."""

import argparse
import sys
import time
from typing import List, Optional

from ..exceptions import TunerError
from ..logger import get_logger
from ..logging_config import setup_logging
from ..tunings import TUNINGS

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ukulele-tuner", description="Ukulele Tuner - tune your strings by ear"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--config-dir",
        default=None,
        help="Configuration directory (default: ~/.config/ukulele_tuner)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    listen_parser = subparsers.add_parser("listen", help="Tune from the microphone")
    listen_parser.add_argument(
        "--tuning", choices=sorted(TUNINGS), default=None, help="Tuning to use"
    )
    listen_parser.add_argument(
        "--device", type=int, default=None, help="Audio input device ID"
    )
    listen_parser.add_argument(
        "--duration",
        type=float,
        default=None,
        help="Stop after this many seconds (default: run until Ctrl-C)",
    )
    listen_parser.add_argument(
        "--no-chime", action="store_true", help="Do not play the tuned jingle"
    )

    file_parser = subparsers.add_parser("file", help="Tune from a WAV recording")
    file_parser.add_argument("path", help="WAV file to analyse")
    file_parser.add_argument(
        "--tuning", choices=sorted(TUNINGS), default=None, help="Tuning to use"
    )
    file_parser.add_argument(
        "--loop", action="store_true", help="Loop the recording until Ctrl-C"
    )

    subparsers.add_parser("tunings", help="List the available tunings")
    subparsers.add_parser("devices", help="List audio input devices")

    return parser


def list_tunings() -> int:
    for name, tuning in TUNINGS.items():
        print(f"{name:<6} {' '.join(str(n) for n in tuning.notes)}")
    return 0


def list_devices() -> int:
    import sounddevice as sd

    for index, device in enumerate(sd.query_devices()):
        if device["max_input_channels"] > 0:
            print(
                f"{index:>3}: {device['name']} "
                f"({device['max_input_channels']} ch, {device['default_samplerate']:.0f} Hz)"
            )
    return 0


def run_tuner(args: argparse.Namespace) -> int:
    """Run a tuning session until interrupted, the duration or the file ends."""
    from ..core.config import ConfigManager
    from ..core.factory import ComponentFactory
    from ..ui.console import ConsoleRenderer

    factory = ComponentFactory(ConfigManager(args.config_dir))

    # The detector is created before any audio device is opened
    pitch_detector = factory.create_pitch_detector()
    if args.command == "file":
        audio_input = factory.create_audio_input("wav", file_path=args.path, loop=args.loop)
        chime = None
    else:
        audio_input = factory.create_audio_input(device_id=args.device)
        chime = None if args.no_chime else factory.create_chime()

    session = factory.create_session(chime=chime, tuning=args.tuning)
    session.events.on_state(ConsoleRenderer(session.tuning).render)

    service = factory.create_tuner_service(
        session, audio_input=audio_input, pitch_detector=pitch_detector
    )
    service.start()
    print(f"Tuning {session.tuning}. Pluck a string (Ctrl-C to stop).")

    duration = getattr(args, "duration", None)
    deadline = time.monotonic() + duration if duration else None
    try:
        while service.is_running() and audio_input.is_running():
            if deadline is not None and time.monotonic() >= deadline:
                break
            service.wait(0.25)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        service.stop()

    return 0


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Args:
        args: Command line arguments, or None to use sys.argv

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    parsed_args = parser.parse_args(args)

    setup_logging("DEBUG" if parsed_args.debug else None)

    if parsed_args.command == "tunings":
        return list_tunings()
    if parsed_args.command == "devices":
        return list_devices()
    if parsed_args.command in ("listen", "file"):
        try:
            return run_tuner(parsed_args)
        except TunerError as e:
            logger.error(f"Cannot start the tuner: {e}")
            return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
