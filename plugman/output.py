"""User-facing output for plugman.

All text the tool prints goes through :func:`message`, which filters by
the verbosity selected on the command line and colors the prefix when
writing to a terminal.
"""

import sys
from enum import Enum, IntEnum


class MessageType(Enum):
    """Kind of message, used to pick the prefix, color and stream."""

    NORMAL = "normal"
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    DEBUG = "debug"


class VerbosityLevel(IntEnum):
    """Minimum ``-v`` count required for a message to be shown."""

    ALWAYS = 0
    VERBOSE = 1
    EXTRA_VERBOSE = 2
    DEBUG = 3


_PREFIXES = {
    MessageType.NORMAL: "",
    MessageType.INFO: "[INFO] ",
    MessageType.SUCCESS: "",
    MessageType.WARNING: "[WARN] ",
    MessageType.ERROR: "[ERROR] ",
    MessageType.DEBUG: "[DEBUG] ",
}

_COLORS = {
    MessageType.INFO: "\033[36m",
    MessageType.SUCCESS: "\033[32m",
    MessageType.WARNING: "\033[33m",
    MessageType.ERROR: "\033[31m",
    MessageType.DEBUG: "\033[90m",
}

_RESET = "\033[0m"


class OutputManager:
    """Holds the process-wide output settings."""

    def __init__(self, verbosity: int = 0, use_color: bool = False):
        self.verbosity = verbosity
        self.use_color = use_color

    def should_show(self, level: VerbosityLevel) -> bool:
        return self.verbosity >= level

    def format(self, text: str, msg_type: MessageType) -> str:
        prefix = _PREFIXES[msg_type]
        if not prefix and msg_type is not MessageType.SUCCESS:
            return text
        color = _COLORS.get(msg_type)
        if self.use_color and color:
            return f"{color}{prefix}{text}{_RESET}"
        return f"{prefix}{text}"

    def emit(self, text: str, msg_type: MessageType, level: VerbosityLevel) -> None:
        if not self.should_show(level):
            return
        stream = sys.stderr if msg_type in (MessageType.ERROR, MessageType.WARNING) else sys.stdout
        print(self.format(text, msg_type), file=stream)


_output = OutputManager()


def get_output() -> OutputManager:
    """Return the shared :class:`OutputManager`."""
    return _output


def message(
    text: str,
    msg_type: MessageType = MessageType.NORMAL,
    level: VerbosityLevel = VerbosityLevel.ALWAYS,
) -> None:
    """Print *text* if the current verbosity allows it.

    Args:
        text: Message body
        msg_type: Kind of message (controls prefix, color and stream)
        level: Minimum verbosity required to show the message
    """
    _output.emit(text, msg_type, level)
