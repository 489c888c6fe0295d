"""Message sanitation and radio-style framing of encoded messages.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, List

from .alphabet import is_symbol
from .errors import InvalidCharacter, InvalidSymbol, LengthExceeded

if TYPE_CHECKING:
    from .enigma import EncodingResult

DEFAULT_MAX_MESSAGE_LENGTH = 500
DEFAULT_WHITESPACE_FILLER = "X"
GROUP_SIZE = 5


def normalize_message(raw: str) -> str:
    """Upper-case user input; the machine itself only knows A-Z."""
    return raw.upper()


def sanitize_message(
    message: str,
    *,
    max_length: int = DEFAULT_MAX_MESSAGE_LENGTH,
    filler: str = DEFAULT_WHITESPACE_FILLER,
) -> str:
    """Validate `message` and replace each whitespace character with `filler`.

    Raises LengthExceeded when the message is longer than `max_length`,
    otherwise InvalidCharacter listing every unsupported character.
    """
    if not is_symbol(filler):
        raise InvalidSymbol(filler)
    if len(message) > max_length:
        raise LengthExceeded(len(message), max_length)

    out: List[str] = []
    bad: List[str] = []
    for c in message:
        if c.isspace():
            out.append(filler)
        elif is_symbol(c):
            out.append(c)
        else:
            bad.append(c)
    if bad:
        raise InvalidCharacter(bad)
    return "".join(out)


def five_letter_groups(text: str, size: int = GROUP_SIZE) -> str:
    return " ".join(text[i:i + size] for i in range(0, len(text), size))


@dataclass
class RadioMessage:
    """An encoded message laid out the way it was sent over the air.

    Example: ``U6Z DE C 1510 = 49 = EHZ TBS = TVEXS QBLTW LDAHH YEOEF``
    is a 49 letter message from C to U6Z at 15:10, basic position EHZ,
    encoded message key TBS, identification group TVEXS, then the body.
    """
    message_time: str
    receiver: str
    sender: str
    message_length: int
    basic_position: str
    encoded_message_key: str
    encoded_message: str
    identification_group: str = "ABCDE"

    @classmethod
    def compose(
        cls,
        result: EncodingResult,
        *,
        receiver: str,
        sender: str,
        message_time: datetime,
        identification_group: str = "ABCDE",
    ) -> "RadioMessage":
        return cls(
            message_time=message_time.strftime("%H%M"),
            receiver=receiver,
            sender=sender,
            message_length=result.message_length,
            basic_position=result.basic_position,
            encoded_message_key=result.encoded_message_key,
            encoded_message=result.encoded_message,
            identification_group=identification_group,
        )

    def __str__(self) -> str:
        parts = [
            self.receiver, "DE", self.sender, self.message_time,
            "=", str(self.message_length), "=",
            self.basic_position, self.encoded_message_key,
            "=", self.identification_group,
        ]
        if self.encoded_message:
            parts.append(five_letter_groups(self.encoded_message))
        return " ".join(parts)
