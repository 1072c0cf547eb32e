"""Cursor-based reader for Radix transaction bytes.

Every read checks the remaining length before touching the buffer and
advances the cursor by exactly the width of the field it returns. Running
out of data raises ``TruncatedInput``; nothing is zero-filled.
"""

from __future__ import annotations

import io
import struct

from construct import Construct, ConstructError, Container, StreamError

from radix_txn.config import (
    BLOB_LENGTH_PREFIX_SIZE,
    PUBLIC_KEY_SIZE,
    SIGNATURE_SIZE,
    SUBSTATE_ID_SIZE,
)
from radix_txn.errors import MalformedField, TruncatedInput
from radix_txn.primitives import Signature, SubstateId


class ByteCursor:
    """Read position over an immutable byte buffer."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._offset = 0

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    @property
    def exhausted(self) -> bool:
        return self._offset >= len(self._data)

    def _require(self, n: int, what: str) -> None:
        if self._offset + n > len(self._data):
            raise TruncatedInput(what, self._offset, n, self.remaining)

    def read_u8(self) -> int:
        self._require(1, "u8")
        v = self._data[self._offset]
        self._offset += 1
        return v

    def read_u32(self) -> int:
        self._require(4, "u32")
        (v,) = struct.unpack_from(">I", self._data, self._offset)
        self._offset += 4
        return v

    def read_raw(self, n: int, what: str = "bytes") -> bytes:
        self._require(n, what)
        v = self._data[self._offset : self._offset + n]
        self._offset += n
        return v

    def read_bytes(self) -> bytes:
        """Read a u32 length prefix followed by that many bytes."""
        start = self._offset
        self._require(BLOB_LENGTH_PREFIX_SIZE, "blob length")
        (length,) = struct.unpack_from(">I", self._data, self._offset)
        if self._offset + BLOB_LENGTH_PREFIX_SIZE + length > len(self._data):
            raise TruncatedInput(
                f"blob of length {length}",
                start,
                BLOB_LENGTH_PREFIX_SIZE + length,
                self.remaining,
            )
        self._offset += BLOB_LENGTH_PREFIX_SIZE
        return self.read_raw(length, "blob")

    def read_public_key(self) -> bytes:
        return self.read_raw(PUBLIC_KEY_SIZE, "public key")

    def read_signature(self) -> Signature:
        return Signature.from_bytes(self.read_raw(SIGNATURE_SIZE, "signature"))

    def read_substate_id(self) -> SubstateId:
        return SubstateId.from_bytes(self.read_raw(SUBSTATE_ID_SIZE, "substate id"))

    def read_struct(self, schema: Construct, what: str) -> Container:
        """Parse a ``construct`` layout starting at the cursor.

        Construct failures are translated so callers only see DecodeError.
        """
        start = self._offset
        stream = io.BytesIO(self._data)
        stream.seek(start)
        try:
            value = schema.parse_stream(stream)
        except StreamError as e:
            raise TruncatedInput(what, start, None, self.remaining) from e
        except (ConstructError, UnicodeDecodeError) as e:
            raise MalformedField(what, start, str(e)) from e
        self._offset = stream.tell()
        return value
