from radix_txn.errors import (
    DecodeError,
    MalformedField,
    TrailingBytes,
    TruncatedInput,
    UnknownOpcode,
    UnknownStateEntryTag,
)
from radix_txn.instructions import (
    Down,
    DownAll,
    DownIndex,
    End,
    Header,
    Instruction,
    LDown,
    LRead,
    Msg,
    Opcode,
    Read,
    Sig,
    Syscall,
    Up,
    VDown,
    VDownArg,
    VRead,
    decode_instruction,
    read_instruction,
)
from radix_txn.primitives import Signature, SubstateId
from radix_txn.reader import ByteCursor
from radix_txn.substates import (
    Address,
    ExitingStake,
    PreparedRegisteredFlagUpdate,
    PreparedStake,
    PreparedUnstake,
    REAddress,
    REAddressType,
    StakeOwnership,
    StateEntry,
    SubstateTypeId,
    TokenDefinition,
    Tokens,
    TokenType,
    ValidatorAllowDelegationFlag,
    ValidatorOwnerCopy,
    ValidatorRegisteredFlagCopy,
    decode_substate,
    read_substate,
)
from radix_txn.transaction import Transaction, decode

__all__ = [
    "ByteCursor",
    "Transaction",
    "decode",
    "DecodeError",
    "MalformedField",
    "TrailingBytes",
    "TruncatedInput",
    "UnknownOpcode",
    "UnknownStateEntryTag",
    "Instruction",
    "Opcode",
    "End",
    "Up",
    "VDown",
    "VDownArg",
    "Down",
    "LDown",
    "Msg",
    "Sig",
    "DownAll",
    "Syscall",
    "Header",
    "DownIndex",
    "LRead",
    "VRead",
    "Read",
    "decode_instruction",
    "read_instruction",
    "Signature",
    "SubstateId",
    "StateEntry",
    "SubstateTypeId",
    "Address",
    "REAddressType",
    "TokenType",
    "REAddress",
    "TokenDefinition",
    "Tokens",
    "PreparedStake",
    "StakeOwnership",
    "PreparedUnstake",
    "ExitingStake",
    "ValidatorAllowDelegationFlag",
    "ValidatorRegisteredFlagCopy",
    "PreparedRegisteredFlagUpdate",
    "ValidatorOwnerCopy",
    "decode_substate",
    "read_substate",
]
