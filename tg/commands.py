"""Chat command parsing.

/start, /help, /track NUMBER and bare numbers of 10+ digits are understood;
anything else is UNRECOGNIZED.
"""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict

BARE_NUMBER_PATTERN = re.compile(r"^\d{10,}$")


class CommandKind(str, Enum):
    START = "start"
    HELP = "help"
    TRACK = "track"
    UNRECOGNIZED = "unrecognized"


class Command(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: CommandKind
    argument: str | None = None


def parse_command(text: str) -> Command:
    text = text.strip()
    # Group chats send "/cmd@BotName"
    head, _, rest = text.partition(" ")
    name = head.split("@", 1)[0]

    if name == "/start" and not rest.strip():
        return Command(kind=CommandKind.START)
    if name == "/help" and not rest.strip():
        return Command(kind=CommandKind.HELP)
    if name == "/track":
        return Command(kind=CommandKind.TRACK, argument=rest.strip())
    if BARE_NUMBER_PATTERN.match(text):
        return Command(kind=CommandKind.TRACK, argument=text)
    return Command(kind=CommandKind.UNRECOGNIZED)
