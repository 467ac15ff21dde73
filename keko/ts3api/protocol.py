"""TS3 Query Protocol utilities."""

import re
from typing import Final

# Literal character -> two character escape sequence
_ESCAPE_MAP: Final[dict[str, str]] = {
    "\\": r"\\",
    "/": r"\/",
    " ": r"\s",
    "|": r"\p",
    "\a": r"\a",
    "\b": r"\b",
    "\f": r"\f",
    "\n": r"\n",
    "\r": r"\r",
    "\t": r"\t",
    "\v": r"\v",
}

_UNESCAPE_MAP: Final[dict[str, str]] = {seq: char for char, seq in _ESCAPE_MAP.items()}

_ESCAPE_TABLE: Final = str.maketrans(_ESCAPE_MAP)

_ESCAPE_SEQUENCE: Final = re.compile(r"\\.", re.DOTALL)


def escape(raw: str) -> str:
    """Escape special characters for TS3 protocol."""
    return raw.translate(_ESCAPE_TABLE)


def unescape(raw: str) -> str:
    """
    Unescape TS3 protocol characters.

    Sequences are replaced in a single left-to-right pass, so the output of
    one replacement is never scanned again (``\\\\s`` becomes ``\\s``, not a
    backslash followed by a space). Unknown sequences are kept as they are.
    """
    return _ESCAPE_SEQUENCE.sub(lambda m: _UNESCAPE_MAP.get(m.group(0), m.group(0)), raw)


def parse_response_to_dict(response: str) -> dict[str, str]:
    """Parse a single TS3 record to dictionary."""
    result: dict[str, str] = {}
    for part in response.strip("\n\r").split(" "):
        if "=" in part:
            key, value = part.split("=", 1)
            result[key] = unescape(value)
        elif part:
            # Flag without value
            result[part] = ""
    return result


def parse_response_to_list(response: str) -> list[dict[str, str]]:
    """Parse TS3 response with multiple items (pipe-separated) to list of dicts."""
    records = (parse_response_to_dict(item) for item in response.split("|"))
    return [record for record in records if record]


def build_command(command: str, *args: str, **kwargs: str | int) -> str:
    """Build a TS3 command string with proper escaping."""
    parts = [command]
    parts.extend(f"-{arg}" for arg in args)
    parts.extend(f"{k}={escape(str(v))}" for k, v in kwargs.items())
    return " ".join(parts)
