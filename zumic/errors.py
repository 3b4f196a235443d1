"""Exception hierarchy for the store and for the ZSP wire protocol."""

from __future__ import annotations


class StoreError(Exception):
    """Base class for every error raised by the storage layer."""


class _DetailedStoreError(StoreError):
    """A store error that carries a free-form detail string."""

    prefix = ""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"{self.prefix}{detail}")


class KeyNotFoundError(StoreError):
    """The requested key does not exist."""

    def __init__(self) -> None:
        super().__init__("Key not found")


class WrongTypeError(_DetailedStoreError):
    """The stored value has the wrong type for the requested operation."""

    prefix = "Wrong type for operation: "


class InvalidCommandError(_DetailedStoreError):
    """A command was malformed or unknown."""

    prefix = "Invalid command: "


class FrameConversionError(_DetailedStoreError):
    """A stored value could not be turned into a protocol frame."""

    prefix = ""


class ZSPError(Exception):
    """Base class for errors of the ZSP protocol codec."""

    prefix = ""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"{self.prefix}{detail}")


class InvalidDataError(ZSPError):
    """The input is not a valid ZSP frame."""

    prefix = "Invalid data: "


class UnexpectedEofError(ZSPError):
    """The input ended where more bytes were required."""

    prefix = "Unexpected EOF: "