"""Errors raised while decoding transaction bytes."""

from __future__ import annotations


class DecodeError(ValueError):
    """Base class for all decoding failures. ``position`` is a byte offset."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(message)
        self.position = position


class TruncatedInput(DecodeError):
    def __init__(
        self, what: str, position: int, needed: int | None, remaining: int
    ) -> None:
        if needed is None:
            message = (
                f"not enough data for {what} at offset {position}: "
                f"{remaining} bytes remain"
            )
        else:
            message = (
                f"not enough data for {what} at offset {position}: "
                f"need {needed}, have {remaining}"
            )
        super().__init__(message, position)
        self.what = what
        self.needed = needed
        self.remaining = remaining


class UnknownOpcode(DecodeError):
    def __init__(self, opcode: int, position: int) -> None:
        super().__init__(f"unexpected opcode 0x{opcode:02x} at offset {position}", position)
        self.opcode = opcode


class UnknownStateEntryTag(DecodeError):
    def __init__(self, tag: int, position: int) -> None:
        super().__init__(
            f"unsupported substate type 0x{tag:02x} at offset {position}", position
        )
        self.tag = tag


class MalformedField(DecodeError):
    """A field inside a known layout holds a value the format does not allow."""

    def __init__(self, what: str, position: int, detail: str) -> None:
        super().__init__(f"malformed {what} at offset {position}: {detail}", position)
        self.what = what
        self.detail = detail


class TrailingBytes(DecodeError):
    def __init__(self, position: int, remaining: int) -> None:
        super().__init__(
            f"{remaining} trailing bytes after offset {position}", position
        )
        self.remaining = remaining
