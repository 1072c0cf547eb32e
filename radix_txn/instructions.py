"""Transaction instructions.

Binary layout: 1-byte Opcode followed by an opcode-specific payload. The
opcode set is closed; an unknown opcode aborts decoding.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, ClassVar, Union

from radix_txn.errors import TrailingBytes, UnknownOpcode
from radix_txn.primitives import Signature, SubstateId
from radix_txn.reader import ByteCursor
from radix_txn.substates import StateEntry, read_substate

logger = logging.getLogger(__name__)


class Opcode(IntEnum):
    END = 0x00
    UP = 0x01
    VDOWN = 0x02
    VDOWNARG = 0x03
    DOWN = 0x04
    LDOWN = 0x05
    MSG = 0x06
    SIG = 0x07
    DOWNALL = 0x08
    SYSCALL = 0x09
    HEADER = 0x0A
    DOWNINDEX = 0x0B
    LREAD = 0x0C
    VREAD = 0x0D
    READ = 0x0E

    def __str__(self) -> str:
        return self.name.lower()


# ---------------------------------------------------------------------------
# Instruction values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class End:
    OPCODE: ClassVar[Opcode] = Opcode.END


@dataclass(frozen=True)
class Up:
    substate: StateEntry

    OPCODE: ClassVar[Opcode] = Opcode.UP


@dataclass(frozen=True)
class VDown:
    substate: StateEntry

    OPCODE: ClassVar[Opcode] = Opcode.VDOWN


@dataclass(frozen=True)
class VDownArg:
    substate: StateEntry
    argument: bytes

    OPCODE: ClassVar[Opcode] = Opcode.VDOWNARG


@dataclass(frozen=True)
class Down:
    substate_id: SubstateId

    OPCODE: ClassVar[Opcode] = Opcode.DOWN


@dataclass(frozen=True)
class LDown:
    index: int  # u32, position of an UP earlier in the same transaction

    OPCODE: ClassVar[Opcode] = Opcode.LDOWN


@dataclass(frozen=True)
class Msg:
    data: bytes

    OPCODE: ClassVar[Opcode] = Opcode.MSG


@dataclass(frozen=True)
class Sig:
    signature: Signature

    OPCODE: ClassVar[Opcode] = Opcode.SIG


@dataclass(frozen=True)
class DownAll:
    class_id: int  # u8

    OPCODE: ClassVar[Opcode] = Opcode.DOWNALL


@dataclass(frozen=True)
class Syscall:
    data: bytes

    OPCODE: ClassVar[Opcode] = Opcode.SYSCALL


@dataclass(frozen=True)
class Header:
    version: int  # u8
    flags: int  # u8

    OPCODE: ClassVar[Opcode] = Opcode.HEADER


@dataclass(frozen=True)
class DownIndex:
    index: bytes

    OPCODE: ClassVar[Opcode] = Opcode.DOWNINDEX


@dataclass(frozen=True)
class LRead:
    index: int  # u32

    OPCODE: ClassVar[Opcode] = Opcode.LREAD


@dataclass(frozen=True)
class VRead:
    substate: StateEntry

    OPCODE: ClassVar[Opcode] = Opcode.VREAD


@dataclass(frozen=True)
class Read:
    substate_id: SubstateId

    OPCODE: ClassVar[Opcode] = Opcode.READ


Instruction = Union[
    End,
    Up,
    VDown,
    VDownArg,
    Down,
    LDown,
    Msg,
    Sig,
    DownAll,
    Syscall,
    Header,
    DownIndex,
    LRead,
    VRead,
    Read,
]


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

_READERS: dict[int, Callable[[ByteCursor], Instruction]] = {
    Opcode.END: lambda c: End(),
    Opcode.UP: lambda c: Up(read_substate(c)),
    Opcode.VDOWN: lambda c: VDown(read_substate(c)),
    Opcode.VDOWNARG: lambda c: VDownArg(read_substate(c), c.read_bytes()),
    Opcode.DOWN: lambda c: Down(c.read_substate_id()),
    Opcode.LDOWN: lambda c: LDown(c.read_u32()),
    Opcode.MSG: lambda c: Msg(c.read_bytes()),
    Opcode.SIG: lambda c: Sig(c.read_signature()),
    Opcode.DOWNALL: lambda c: DownAll(c.read_u8()),
    Opcode.SYSCALL: lambda c: Syscall(c.read_bytes()),
    Opcode.HEADER: lambda c: Header(c.read_u8(), c.read_u8()),
    Opcode.DOWNINDEX: lambda c: DownIndex(c.read_bytes()),
    Opcode.LREAD: lambda c: LRead(c.read_u32()),
    Opcode.VREAD: lambda c: VRead(read_substate(c)),
    Opcode.READ: lambda c: Read(c.read_substate_id()),
}


def read_instruction(cursor: ByteCursor) -> Instruction:
    """Read one opcode byte and its payload."""
    position = cursor.offset
    opcode = cursor.read_u8()
    reader = _READERS.get(opcode)
    if reader is None:
        logger.debug("unexpected opcode 0x%02x at offset %d", opcode, position)
        raise UnknownOpcode(opcode, position)
    return reader(cursor)


def decode_instruction(data: bytes) -> Instruction:
    """Decode a buffer holding exactly one instruction."""
    cursor = ByteCursor(data)
    inst = read_instruction(cursor)
    if not cursor.exhausted:
        raise TrailingBytes(cursor.offset, cursor.remaining)
    return inst
