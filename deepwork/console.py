"""Interactive console for Deep Work Terminal.

Reads lines from stdin and feeds them to the command interpreter. Log
entries and phase completions are printed as they happen, including those
produced by the background ticker.

Lines starting with ``:`` are console controls standing in for the
on-screen buttons:

    :toggle   start or pause
    :reset    reset the current phase
    :skip     skip to the next phase
    :screen   print the full terminal screen
    :quit     exit

Usage:
    deepwork-console --config config.yaml
"""

import argparse
import logging
import sys

from deepwork.app import build_controller
from deepwork.services import EventBus, SessionController, get_config_service
from deepwork.services.display import render_screen
from deepwork.services.event_bus import Event

logger = logging.getLogger(__name__)

PROMPT = "root@deepwork:~$ "


def _print_log_entry(event: Event) -> None:
    data = event.data
    print(f"[{data['timestamp']}] {data['kind']}: {data['message']}", flush=True)


def _print_log_cleared(event: Event) -> None:
    print("-- log cleared --", flush=True)


def _print_phase_completed(event: Event) -> None:
    data = event.data
    print(f">> {data['from_phase']} complete, entering {data['to_phase']}", flush=True)


def run_control(controller: SessionController, control: str) -> bool:
    """Run a ``:`` console control.

    Returns:
        False when the console should exit.
    """
    if control == "quit":
        return False
    if control == "toggle":
        controller.toggle_running()
    elif control == "reset":
        controller.reset()
    elif control == "skip":
        controller.skip()
    elif control == "screen":
        print(render_screen(controller.snapshot()), end="", flush=True)
    else:
        print(f"Unknown control :{control} (try :toggle :reset :skip :screen :quit)")
    return True


def repl(controller: SessionController, stream=None) -> None:
    """Read lines until EOF or ``:quit``."""
    stream = stream or sys.stdin
    interactive = stream.isatty()

    while True:
        if interactive:
            print(PROMPT, end="", flush=True)
        line = stream.readline()
        if not line:
            break

        text = line.strip()
        if text.startswith(":"):
            if not run_control(controller, text[1:].lower()):
                break
            continue

        controller.submit(line)


def main(argv: list[str] | None = None) -> int:
    """Run the interactive console."""
    parser = argparse.ArgumentParser(description="Deep Work Terminal console")
    parser.add_argument("--config", "-c", default="config.yaml", help="Path to config.yaml")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = get_config_service(args.config).get_config()
    logger.debug(f"Console using data directory {config.data_dir}")

    event_bus = EventBus()
    event_bus.subscribe("log_appended", _print_log_entry)
    event_bus.subscribe("log_cleared", _print_log_cleared)
    event_bus.subscribe("phase_completed", _print_phase_completed)

    controller = build_controller(config, event_bus=event_bus)
    print(render_screen(controller.snapshot()), end="", flush=True)

    try:
        repl(controller)
    except KeyboardInterrupt:
        print()
    finally:
        controller.shutdown()

    return 0


if __name__ == "__main__":
    sys.exit(main())
