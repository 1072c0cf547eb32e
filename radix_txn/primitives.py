"""Fixed-width composite values carried by instructions."""

from __future__ import annotations

from dataclasses import dataclass

from radix_txn.config import BYTE_ORDER, SIGNATURE_SIZE, SUBSTATE_ID_SIZE, TXN_ID_SIZE


@dataclass(frozen=True)
class Signature:
    """Recoverable ECDSA signature as laid out on the wire: v, r, s."""

    v: int
    r: bytes
    s: bytes

    @classmethod
    def from_bytes(cls, data: bytes) -> Signature:
        if len(data) != SIGNATURE_SIZE:
            raise ValueError(f"signature must be {SIGNATURE_SIZE} bytes, got {len(data)}")
        return cls(v=data[0], r=bytes(data[1:33]), s=bytes(data[33:65]))

    def to_bytes(self) -> bytes:
        return bytes([self.v]) + self.r + self.s


@dataclass(frozen=True)
class SubstateId:
    """Reference to an output of an earlier transaction."""

    txn_id: bytes
    index: int  # u32

    @classmethod
    def from_bytes(cls, data: bytes) -> SubstateId:
        if len(data) != SUBSTATE_ID_SIZE:
            raise ValueError(
                f"substate id must be {SUBSTATE_ID_SIZE} bytes, got {len(data)}"
            )
        return cls(
            txn_id=bytes(data[:TXN_ID_SIZE]),
            index=int.from_bytes(data[TXN_ID_SIZE:], BYTE_ORDER),
        )

    def to_bytes(self) -> bytes:
        return self.txn_id + self.index.to_bytes(4, BYTE_ORDER)

    def __str__(self) -> str:
        return f"{self.txn_id.hex()}:{self.index}"
