"""Ledger state entries (substates) embedded in UP, VDOWN, VDOWNARG and VREAD.

Binary layout: 1-byte SubstateTypeId tag followed by a fixed field layout
per type. Layouts are declared as ``construct`` structs and parsed at the
cursor position; every layout starts with a reserved byte which is kept
but not validated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Optional, Union

from construct import (
    Bytes,
    BytesInteger,
    Construct,
    Container,
    Error,
    Flag,
    Int8ub,
    Int32ub,
    Int64ub,
    PascalString,
    Pass,
    Struct,
    Switch,
    this,
)

from radix_txn.config import HASHED_KEY_NONCE_SIZE, PUBLIC_KEY_SIZE, UINT256_SIZE
from radix_txn.errors import TrailingBytes, UnknownStateEntryTag
from radix_txn.reader import ByteCursor

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Type tags
# ---------------------------------------------------------------------------


class SubstateTypeId(IntEnum):
    RE_ADDRESS = 0x00
    TOKEN_DEFINITION = 0x03
    TOKENS = 0x04
    PREPARED_STAKE = 0x05
    STAKE_OWNERSHIP = 0x06
    PREPARED_UNSTAKE = 0x07
    EXITING_STAKE = 0x08
    VALIDATOR_ALLOW_DELEGATION_FLAG = 0x0C
    VALIDATOR_REGISTERED_FLAG_COPY = 0x0D
    PREPARED_REGISTERED_FLAG_UPDATE = 0x0E
    VALIDATOR_OWNER_COPY = 0x11

    def __str__(self) -> str:
        return self.name.lower()


class REAddressType(IntEnum):
    SYSTEM = 0x00
    NATIVE_TOKEN = 0x01
    HASHED_KEY_NONCE = 0x03
    PUB_KEY = 0x04

    def __str__(self) -> str:
        _names = {0: "system", 1: "native-token", 3: "hashed-key-nonce", 4: "pub-key"}
        return _names.get(self.value, "unknown")


class TokenType(IntEnum):
    FIXED = 0x00
    MUTABLE = 0x01


# ---------------------------------------------------------------------------
# Field layouts
# ---------------------------------------------------------------------------

PublicKey = Bytes(PUBLIC_KEY_SIZE)
UInt256 = BytesInteger(UINT256_SIZE)
String = PascalString(Int32ub, "utf8")

AddressSchema = Struct(
    "type" / Int8ub,
    "body" / Switch(
        this.type,
        {
            REAddressType.SYSTEM: Pass,
            REAddressType.NATIVE_TOKEN: Pass,
            REAddressType.HASHED_KEY_NONCE: Bytes(HASHED_KEY_NONCE_SIZE),
            REAddressType.PUB_KEY: PublicKey,
        },
        default=Error,
    ),
)

REAddressSchema = Struct(
    "address" / AddressSchema,
)

TokenDefinitionSchema = Struct(
    "reserved" / Int8ub,
    "resource" / AddressSchema,
    "token_type" / Int8ub,
    "supply" / Switch(
        this.token_type,
        {TokenType.FIXED: UInt256, TokenType.MUTABLE: Pass},
        default=Error,
    ),
    "minter" / Switch(
        this.token_type,
        {TokenType.FIXED: Pass, TokenType.MUTABLE: PublicKey},
        default=Error,
    ),
    "name" / String,
    "description" / String,
    "url" / String,
    "icon_url" / String,
)

TokensSchema = Struct(
    "reserved" / Int8ub,
    "resource" / AddressSchema,
    "holder" / AddressSchema,
    "amount" / UInt256,
)

StakeSchema = Struct(
    "reserved" / Int8ub,
    "delegate" / PublicKey,
    "owner" / AddressSchema,
    "amount" / UInt256,
)

ExitingStakeSchema = Struct(
    "reserved" / Int8ub,
    "epoch_unlocked" / Int64ub,
    "delegate" / PublicKey,
    "owner" / AddressSchema,
    "amount" / UInt256,
)

ValidatorFlagSchema = Struct(
    "reserved" / Int8ub,
    "validator" / PublicKey,
    "flag" / Flag,
)

ValidatorOwnerSchema = Struct(
    "reserved" / Int8ub,
    "validator" / PublicKey,
    "owner" / AddressSchema,
)


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Address:
    address_type: REAddressType
    body: bytes = b""

    @classmethod
    def from_container(cls, c: Container) -> Address:
        return cls(address_type=REAddressType(c.type), body=c.body or b"")

    def __str__(self) -> str:
        if not self.body:
            return str(self.address_type)
        return f"{self.address_type}:{self.body.hex()}"


@dataclass(frozen=True)
class REAddress:
    address: Address

    TYPE_ID: ClassVar[SubstateTypeId] = SubstateTypeId.RE_ADDRESS
    SCHEMA: ClassVar[Construct] = REAddressSchema

    @classmethod
    def from_container(cls, c: Container) -> REAddress:
        return cls(address=Address.from_container(c.address))


@dataclass(frozen=True)
class TokenDefinition:
    reserved: int
    resource: Address
    token_type: TokenType
    supply: Optional[int]  # u256, fixed supply tokens only
    minter: Optional[bytes]  # mutable supply tokens only
    name: str
    description: str
    url: str
    icon_url: str

    TYPE_ID: ClassVar[SubstateTypeId] = SubstateTypeId.TOKEN_DEFINITION
    SCHEMA: ClassVar[Construct] = TokenDefinitionSchema

    @classmethod
    def from_container(cls, c: Container) -> TokenDefinition:
        return cls(
            reserved=c.reserved,
            resource=Address.from_container(c.resource),
            token_type=TokenType(c.token_type),
            supply=c.supply,
            minter=c.minter,
            name=c.name,
            description=c.description,
            url=c.url,
            icon_url=c.icon_url,
        )


@dataclass(frozen=True)
class Tokens:
    reserved: int
    resource: Address
    holder: Address
    amount: int  # u256

    TYPE_ID: ClassVar[SubstateTypeId] = SubstateTypeId.TOKENS
    SCHEMA: ClassVar[Construct] = TokensSchema

    @classmethod
    def from_container(cls, c: Container) -> Tokens:
        return cls(
            reserved=c.reserved,
            resource=Address.from_container(c.resource),
            holder=Address.from_container(c.holder),
            amount=c.amount,
        )


@dataclass(frozen=True)
class _Stake:
    reserved: int
    delegate: bytes
    owner: Address
    amount: int  # u256

    SCHEMA: ClassVar[Construct] = StakeSchema

    @classmethod
    def from_container(cls, c: Container):
        return cls(
            reserved=c.reserved,
            delegate=c.delegate,
            owner=Address.from_container(c.owner),
            amount=c.amount,
        )


@dataclass(frozen=True)
class PreparedStake(_Stake):
    TYPE_ID: ClassVar[SubstateTypeId] = SubstateTypeId.PREPARED_STAKE


@dataclass(frozen=True)
class StakeOwnership(_Stake):
    TYPE_ID: ClassVar[SubstateTypeId] = SubstateTypeId.STAKE_OWNERSHIP


@dataclass(frozen=True)
class PreparedUnstake(_Stake):
    TYPE_ID: ClassVar[SubstateTypeId] = SubstateTypeId.PREPARED_UNSTAKE


@dataclass(frozen=True)
class ExitingStake:
    reserved: int
    epoch_unlocked: int  # u64
    delegate: bytes
    owner: Address
    amount: int  # u256

    TYPE_ID: ClassVar[SubstateTypeId] = SubstateTypeId.EXITING_STAKE
    SCHEMA: ClassVar[Construct] = ExitingStakeSchema

    @classmethod
    def from_container(cls, c: Container) -> ExitingStake:
        return cls(
            reserved=c.reserved,
            epoch_unlocked=c.epoch_unlocked,
            delegate=c.delegate,
            owner=Address.from_container(c.owner),
            amount=c.amount,
        )


@dataclass(frozen=True)
class ValidatorAllowDelegationFlag:
    reserved: int
    validator: bytes
    allow_delegation: bool

    TYPE_ID: ClassVar[SubstateTypeId] = SubstateTypeId.VALIDATOR_ALLOW_DELEGATION_FLAG
    SCHEMA: ClassVar[Construct] = ValidatorFlagSchema

    @classmethod
    def from_container(cls, c: Container) -> ValidatorAllowDelegationFlag:
        return cls(reserved=c.reserved, validator=c.validator, allow_delegation=c.flag)


@dataclass(frozen=True)
class _RegisteredFlag:
    reserved: int
    validator: bytes
    is_registered: bool

    SCHEMA: ClassVar[Construct] = ValidatorFlagSchema

    @classmethod
    def from_container(cls, c: Container):
        return cls(reserved=c.reserved, validator=c.validator, is_registered=c.flag)


@dataclass(frozen=True)
class ValidatorRegisteredFlagCopy(_RegisteredFlag):
    TYPE_ID: ClassVar[SubstateTypeId] = SubstateTypeId.VALIDATOR_REGISTERED_FLAG_COPY


@dataclass(frozen=True)
class PreparedRegisteredFlagUpdate(_RegisteredFlag):
    TYPE_ID: ClassVar[SubstateTypeId] = SubstateTypeId.PREPARED_REGISTERED_FLAG_UPDATE


@dataclass(frozen=True)
class ValidatorOwnerCopy:
    reserved: int
    validator: bytes
    owner: Address

    TYPE_ID: ClassVar[SubstateTypeId] = SubstateTypeId.VALIDATOR_OWNER_COPY
    SCHEMA: ClassVar[Construct] = ValidatorOwnerSchema

    @classmethod
    def from_container(cls, c: Container) -> ValidatorOwnerCopy:
        return cls(
            reserved=c.reserved,
            validator=c.validator,
            owner=Address.from_container(c.owner),
        )


StateEntry = Union[
    REAddress,
    TokenDefinition,
    Tokens,
    PreparedStake,
    StakeOwnership,
    PreparedUnstake,
    ExitingStake,
    ValidatorAllowDelegationFlag,
    ValidatorRegisteredFlagCopy,
    PreparedRegisteredFlagUpdate,
    ValidatorOwnerCopy,
]

SUBSTATE_TYPES: dict[int, type] = {
    cls.TYPE_ID: cls
    for cls in (
        REAddress,
        TokenDefinition,
        Tokens,
        PreparedStake,
        StakeOwnership,
        PreparedUnstake,
        ExitingStake,
        ValidatorAllowDelegationFlag,
        ValidatorRegisteredFlagCopy,
        PreparedRegisteredFlagUpdate,
        ValidatorOwnerCopy,
    )
}


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def read_substate(cursor: ByteCursor) -> StateEntry:
    """Read a tag byte and the layout it selects."""
    position = cursor.offset
    tag = cursor.read_u8()
    cls = SUBSTATE_TYPES.get(tag)
    if cls is None:
        logger.debug("unsupported substate type 0x%02x at offset %d", tag, position)
        raise UnknownStateEntryTag(tag, position)
    return cls.from_container(cursor.read_struct(cls.SCHEMA, cls.__name__))


def decode_substate(data: bytes) -> StateEntry:
    """Decode a buffer holding exactly one tagged state entry."""
    cursor = ByteCursor(data)
    substate = read_substate(cursor)
    if not cursor.exhausted:
        raise TrailingBytes(cursor.offset, cursor.remaining)
    return substate
