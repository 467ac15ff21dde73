import argparse
import logging
import sys
from pathlib import Path

import yaml

from keko.ts3viewer.config import CONFIG_PATH, Settings
from keko.ts3viewer.model import RenderedServer
from keko.ts3viewer.viewer import Viewer

logger = logging.getLogger(__name__)


class RecordedResponse:
    """Query executor replaying a previously captured status response."""

    def __init__(self, raw: str) -> None:
        self._raw = raw

    def execute(self, command: str) -> str:
        # The capture already holds every command output, hand it out once
        raw, self._raw = self._raw, ""
        return raw


def load_settings(config_path: Path) -> Settings:
    if not config_path.exists():
        logger.error("Config file not found: %s", config_path)
        sys.exit(1)

    try:
        return Settings.from_yaml(config_path)
    except Exception as e:
        logger.error("Failed to load config file %s: %s", config_path, e)
        sys.exit(1)


def read_response(path: Path | None) -> str:
    source = path or "stdin"
    try:
        # Bytes keep the \n\r section delimiters intact
        data = path.read_bytes() if path else sys.stdin.buffer.read()
    except OSError as e:
        logger.error("Failed to read response %s: %s", source, e)
        sys.exit(1)

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.error("Response %s is not valid UTF-8: %s", source, e)
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Kellerkompanie TeamSpeak 3 Viewer")
    parser.add_argument(
        "--config",
        type=Path,
        default=CONFIG_PATH,
        help=f"Path to config file (default: {CONFIG_PATH})",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "response",
        type=Path,
        nargs="?",
        help="Captured status query response (default: read from stdin)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    settings = load_settings(args.config)

    viewer = Viewer(RecordedResponse(read_response(args.response)), settings)
    content = viewer.render()
    if not isinstance(content, RenderedServer):
        print(content, file=sys.stderr)
        sys.exit(1)

    yaml.safe_dump(content.to_dict(), sys.stdout, default_flow_style=False, sort_keys=False, allow_unicode=True)


if __name__ == "__main__":
    main()
