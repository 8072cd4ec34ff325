import argparse
import logging
import os
import sys
from typing import List, Optional

from polykey.controllers.keyboard_controller import KeyboardController
from polykey.domain.layouts import available_languages, load_layouts
from polykey.services.settings_store import SettingsStore

# -------------------------------------------------
#          SETTINGS PERSISTENCE (TOP-LEVEL)
# -------------------------------------------------

SETTINGS_PATH = os.path.join(os.path.dirname(__file__), "settings.yaml")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Type physical keys through a virtual keyboard layout.",
        epilog="Example: python main.py --language KR dkssudgktpdy",
    )
    parser.add_argument("keys", nargs="+", help="Original (QWERTY) keys to type, in order.")
    parser.add_argument("--language", help="Layout language code (defaults to the saved one).")
    parser.add_argument("--settings", default=None, help="Path to settings.yaml.")
    parser.add_argument("--show-steps", action="store_true", help="Print the buffer after every key.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    return parser


def run(argv: Optional[List[str]] = None, out=None) -> int:
    """Entry point with injectable argv/output (used by tests)."""
    args = _build_parser().parse_args(argv)
    out = out or sys.stdout

    # Without --verbose, warnings reach stderr through logging's last-resort handler.
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="[%(levelname)s] %(name)s: %(message)s")

    store = SettingsStore(args.settings or SETTINGS_PATH)
    layouts = load_layouts()
    languages = available_languages(layouts)

    if args.language:
        language = args.language.upper()
        if language not in languages:
            print(f"[ERROR] Unknown language {language!r} (available: {', '.join(languages)})", file=sys.stderr)
            return 2
        store.set_language(language)
    else:
        language = store.get_language(languages)

    controller = KeyboardController(language=language, layouts=layouts)

    # Separate arguments are separated by a space, as if typed.
    for i, chunk in enumerate(args.keys):
        if i:
            controller.press(" ")
        steps = controller.type_keys(chunk)
        if args.show_steps:
            for step in steps:
                print(step, file=out)

    if not args.show_steps:
        print(controller.text, file=out)
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
