"""Command line entry point: encode a message and print it as a radio message.

Usage:
    enigmalab --use-sample --basic-position EHZ --message-key TBS --message "attack at dawn"
    enigmalab --reflector B --rotor-left IV --rotor-middle II --rotor-right V \
        --plugboard AE,BG --plugboard QX --basic-position AAA --message-key XYZ --message hello
    enigmalab --interactive                       # prompt for everything that is missing

Historical / education use only.
"""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from typing import Callable, List, Optional, TypeVar

from enigmalab.config import Settings, load_settings
from enigmalab.machine.alphabet import ALPHABET
from enigmalab.machine.builder import EnigmaBuilder
from enigmalab.machine.errors import BuildIncomplete, BuildPart, EnigmaError
from enigmalab.machine.message import RadioMessage, normalize_message, sanitize_message
from enigmalab.machine.plugboard import PlugboardConnection, parse_plugboard_connections
from enigmalab.machine.reflector import Reflector
from enigmalab.machine.registry import PartRegistry
from enigmalab.machine.rotor import Rotor
from enigmalab.machine.rotor_chain import RotorChain

logger = logging.getLogger(__name__)

T = TypeVar("T")

EXIT_WORD = "exit"


class _Parsers:
    """Turn raw user text into machine parts; every parser raises EnigmaError."""

    def __init__(self, registry: PartRegistry, settings: Settings):
        self.registry = registry
        self.settings = settings

    def reflector(self, text: str) -> Reflector:
        return self.registry.reflector(text.strip().upper())

    def rotor(self, text: str) -> Rotor:
        return self.registry.rotor(text.strip().upper())

    def plugboard(self, text: str) -> List[PlugboardConnection]:
        return parse_plugboard_connections(normalize_message(text))

    def setting(self, text: str) -> str:
        return RotorChain.check_setting(text.strip().upper())

    def message(self, text: str) -> str:
        text = normalize_message(text)
        sanitize_message(
            text,
            max_length=self.settings.max_message_length,
            filler=self.settings.whitespace_filler,
        )
        return text


def prompt(title: str, info: str, parse: Callable[[str], T], input_fn: Optional[Callable[[str], str]] = None) -> T:
    """Ask until `parse` accepts the answer; the word 'exit' quits."""
    print(f"|--- {title} ---")
    print(f"| {info}")
    print(f"| write '{EXIT_WORD}' to quit")
    while True:
        answer = (input_fn or input)("> ").strip()
        if answer.lower() == EXIT_WORD:
            raise SystemExit(0)
        try:
            return parse(answer)
        except EnigmaError as exc:
            print(f"| {exc}", file=sys.stderr)
            print(f"| Write '{EXIT_WORD}' to quit or provide valid value", file=sys.stderr)


def build_parser(registry: PartRegistry) -> argparse.ArgumentParser:
    rotors = ", ".join(registry.rotor_names())
    reflectors = ", ".join(registry.reflector_names())
    parser = argparse.ArgumentParser(
        prog="enigmalab",
        description="Enigma machine simulator - encode (or decode) a message",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  enigmalab --use-sample --basic-position EHZ --message-key TBS --message 'attack at dawn'\n"
            "  enigmalab --interactive\n"
        ),
    )
    parser.add_argument(
        "--interactive", action="store_true",
        help="Ask for every missing parameter and re-ask after invalid input",
    )
    parser.add_argument(
        "--use-sample", action="store_true",
        help="Start from Enigma I: identity entry disk and plugboard, reflector B, rotors I, II, III",
    )
    parser.add_argument("--reflector", help=f"Reflector - allowed values: {reflectors}")
    parser.add_argument("--rotor-left", help=f"Left rotor - allowed values: {rotors}")
    parser.add_argument("--rotor-middle", help=f"Middle rotor - allowed values: {rotors}")
    parser.add_argument("--rotor-right", help=f"Right rotor - allowed values: {rotors}")
    parser.add_argument(
        "--plugboard", action="append", default=[], metavar="PAIRS",
        help="Plugboard cables, e.g. AE,BG,GH (may be repeated)",
    )
    parser.add_argument("--basic-position", help="Three letters, e.g. EGW (pick at random)")
    parser.add_argument("--message-key", help="Three letters, e.g. HIB (pick at random)")
    parser.add_argument("--message", help="Message to encode")
    parser.add_argument("--receiver", default=None, help="Receiver call sign (default from settings)")
    parser.add_argument("--sender", default=None, help="Sender call sign (default from settings)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return parser


def _collect_parts(args, builder: EnigmaBuilder, parsers: _Parsers) -> None:
    if args.use_sample:
        builder.reflector(parsers.reflector("B"))
        builder.rotor_left(parsers.rotor("I"))
        builder.rotor_middle(parsers.rotor("II"))
        builder.rotor_right(parsers.rotor("III"))
    if args.reflector:
        builder.reflector(parsers.reflector(args.reflector))
    if args.rotor_left:
        builder.rotor_left(parsers.rotor(args.rotor_left))
    if args.rotor_middle:
        builder.rotor_middle(parsers.rotor(args.rotor_middle))
    if args.rotor_right:
        builder.rotor_right(parsers.rotor(args.rotor_right))
    if args.plugboard:
        builder.plugboard_connections(parsers.plugboard(",".join(args.plugboard)))


def _ask_for_part(part: BuildPart, builder: EnigmaBuilder, parsers: _Parsers, input_fn) -> None:
    rotors = "Available: " + ", ".join(parsers.registry.rotor_names())
    if part is BuildPart.REFLECTOR:
        builder.reflector(prompt(
            "UKW (reflector)",
            "Available: " + ", ".join(parsers.registry.reflector_names()),
            parsers.reflector, input_fn,
        ))
    elif part is BuildPart.LEFT_ROTOR:
        builder.rotor_left(prompt("Walzenlage I (left rotor)", rotors, parsers.rotor, input_fn))
    elif part is BuildPart.MIDDLE_ROTOR:
        builder.rotor_middle(prompt("Walzenlage II (middle rotor)", rotors, parsers.rotor, input_fn))
    elif part is BuildPart.RIGHT_ROTOR:
        builder.rotor_right(prompt("Walzenlage III (right rotor)", rotors, parsers.rotor, input_fn))
    elif part is BuildPart.PLUGBOARD:
        builder.plugboard_connections(prompt(
            "Steckerverbindungen (plugboard)",
            "(Optional, press 'enter' if not required) pairs split by comma, e.g. AE,BG,GH. "
            f"Allowed characters: {ALPHABET}",
            parsers.plugboard, input_fn,
        ))
    else:
        builder.entry_disk(parsers.registry.entry_disk())


def run(args, settings: Settings, input_fn: Optional[Callable[[str], str]] = None) -> int:
    registry = PartRegistry()
    parsers = _Parsers(registry, settings)
    builder = EnigmaBuilder(settings)

    try:
        _collect_parts(args, builder, parsers)
    except EnigmaError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    basic_position = args.basic_position
    message_key = args.message_key
    message = args.message

    if not args.interactive:
        try:
            enigma = builder.build()
            basic_position = parsers.setting(basic_position or "")
            message_key = parsers.setting(message_key or "")
            message = parsers.message(message or "")
            result = enigma.encode(basic_position, message_key, message)
        except EnigmaError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
    else:
        while True:
            try:
                enigma = builder.build()
                break
            except BuildIncomplete as exc:
                print(f"{exc.part} error when building Enigma: {exc.problems[0][1]}", file=sys.stderr)
                _ask_for_part(exc.part, builder, parsers, input_fn)

        basic_position = _value_or_prompt(
            basic_position, parsers.setting, input_fn,
            "Grundstellung (random basic position)",
            f"Three letters from {ALPHABET}, for example: EGW",
        )
        message_key = _value_or_prompt(
            message_key, parsers.setting, input_fn,
            "Spruchschluessel (random message key)",
            f"Three letters from {ALPHABET}, for example: HIB",
        )
        message_info = (
            "Enter the message that should be encoded using settings provided earlier "
            f"(max {settings.max_message_length} characters)"
        )
        message = _value_or_prompt(message, parsers.message, input_fn, "Message to encode", message_info)
        while True:
            try:
                result = enigma.encode(basic_position, message_key, message)
                break
            except EnigmaError as exc:
                print("Failed to encode the message due to error:", file=sys.stderr)
                print(str(exc), file=sys.stderr)
                message = prompt("Message to encode", message_info, parsers.message, input_fn)

    radio = RadioMessage.compose(
        result,
        receiver=args.receiver or settings.receiver,
        sender=args.sender or settings.sender,
        message_time=datetime.now(),
        identification_group=settings.identification_group,
    )
    print()
    print(radio)
    return 0


def _value_or_prompt(value: Optional[str], parse: Callable[[str], str], input_fn, title: str, info: str) -> str:
    if value is not None:
        try:
            return parse(value)
        except EnigmaError as exc:
            print(f"| {exc}", file=sys.stderr)
    return prompt(title, info, parse, input_fn)


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    registry = PartRegistry()
    args = build_parser(registry).parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    return run(args, settings)


if __name__ == "__main__":
    sys.exit(main())
