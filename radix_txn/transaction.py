"""Transaction decoding.

A transaction is a flat run of instructions with no count prefix and no
framing: decoding continues until the buffer is exhausted. END is decoded
like any other instruction and does not stop the loop.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from radix_txn.instructions import Header, Instruction, Msg, Sig, Up, read_instruction
from radix_txn.reader import ByteCursor
from radix_txn.substates import StateEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transaction:
    instructions: tuple[Instruction, ...]
    raw: bytes
    offsets: tuple[int, ...]  # start offset of each instruction in raw

    @classmethod
    def from_bytes(cls, data: bytes) -> Transaction:
        raw = bytes(data)
        cursor = ByteCursor(raw)
        instructions: list[Instruction] = []
        offsets: list[int] = []
        while not cursor.exhausted:
            offsets.append(cursor.offset)
            instructions.append(read_instruction(cursor))

        logger.debug("decoded %d instructions from %d bytes", len(instructions), len(raw))
        return cls(instructions=tuple(instructions), raw=raw, offsets=tuple(offsets))

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __len__(self) -> int:
        return len(self.instructions)

    def __getitem__(self, i: int) -> Instruction:
        return self.instructions[i]

    def instruction_bytes(self, i: int) -> bytes:
        """Return the exact encoded bytes of instruction ``i``."""
        if i < 0:
            i += len(self.offsets)
        start = self.offsets[i]
        end = self.offsets[i + 1] if i + 1 < len(self.offsets) else len(self.raw)
        return self.raw[start:end]

    @property
    def header(self) -> Optional[Header]:
        return next((i for i in self.instructions if isinstance(i, Header)), None)

    @property
    def signature(self) -> Optional[Sig]:
        return next((i for i in self.instructions if isinstance(i, Sig)), None)

    @property
    def messages(self) -> list[bytes]:
        return [i.data for i in self.instructions if isinstance(i, Msg)]

    @property
    def substates_created(self) -> list[StateEntry]:
        return [i.substate for i in self.instructions if isinstance(i, Up)]


def decode(data: bytes) -> Transaction:
    """Decode one transaction's bytes, raising DecodeError on malformed input."""
    return Transaction.from_bytes(data)
