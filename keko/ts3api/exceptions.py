"""TS3 API Exceptions."""


class TS3Error(Exception):
    """Base exception for TS3 API errors."""

    pass


class MalformedResponseError(TS3Error):
    """Status query response could not be split into its expected sections."""

    def __init__(self, message: str, section_count: int | None = None) -> None:
        self.section_count = section_count
        super().__init__(message)
