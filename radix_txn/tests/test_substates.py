import struct

import pytest

from radix_txn import (
    Address,
    ByteCursor,
    ExitingStake,
    MalformedField,
    PreparedRegisteredFlagUpdate,
    PreparedStake,
    PreparedUnstake,
    REAddress,
    REAddressType,
    StakeOwnership,
    SubstateTypeId,
    TokenDefinition,
    Tokens,
    TokenType,
    TrailingBytes,
    TruncatedInput,
    UnknownStateEntryTag,
    ValidatorAllowDelegationFlag,
    ValidatorOwnerCopy,
    ValidatorRegisteredFlagCopy,
    decode_substate,
    read_substate,
)

VALIDATOR_KEY = bytes([0x02]) + bytes(range(1, 33))
OWNER_KEY = bytes([0x03]) + bytes(range(100, 132))
HASHED_KEY = bytes(range(200, 226))


def _pack_u32(v: int) -> bytes:
    return struct.pack(">I", v)


def _pack_u64(v: int) -> bytes:
    return struct.pack(">Q", v)


def _u256(v: int) -> bytes:
    return v.to_bytes(32, "big")


def _string(s: str) -> bytes:
    encoded = s.encode("utf-8")
    return _pack_u32(len(encoded)) + encoded


def _addr_pub_key(key: bytes = OWNER_KEY) -> bytes:
    return bytes([0x04]) + key


def _addr_hashed(h: bytes = HASHED_KEY) -> bytes:
    return bytes([0x03]) + h


NATIVE = bytes([0x01])
OWNER = Address(REAddressType.PUB_KEY, OWNER_KEY)
TOKEN = Address(REAddressType.HASHED_KEY_NONCE, HASHED_KEY)


def _token_metadata() -> bytes:
    return (
        _string("Gold")
        + _string("Shiny")
        + _string("https://gold.example")
        + _string("https://gold.example/icon.png")
    )


class TestAddress:
    def test_system(self):
        s = decode_substate(bytes([0x00, 0x00]))
        assert s == REAddress(Address(REAddressType.SYSTEM))
        assert str(s.address) == "system"

    def test_native_token(self):
        s = decode_substate(bytes([0x00]) + NATIVE)
        assert s == REAddress(Address(REAddressType.NATIVE_TOKEN, b""))

    def test_hashed_key_nonce(self):
        s = decode_substate(bytes([0x00]) + _addr_hashed())
        assert s.address == TOKEN
        assert str(s.address) == f"hashed-key-nonce:{HASHED_KEY.hex()}"

    def test_pub_key(self):
        s = decode_substate(bytes([0x00]) + _addr_pub_key())
        assert s.address == OWNER

    @pytest.mark.parametrize("addr_type", [0x02, 0x05, 0xFF])
    def test_unknown_address_type(self, addr_type):
        with pytest.raises(MalformedField) as exc:
            decode_substate(bytes([0x00, addr_type]))
        assert exc.value.position == 1

    def test_truncated_pub_key(self):
        with pytest.raises(TruncatedInput):
            decode_substate(bytes([0x00]) + _addr_pub_key()[:-1])


class TestTokenDefinition:
    def test_fixed_supply(self):
        data = (
            bytes([0x03, 0x00])
            + _addr_hashed()
            + bytes([TokenType.FIXED])
            + _u256(10**21)
            + _token_metadata()
        )
        s = decode_substate(data)
        assert s == TokenDefinition(
            reserved=0,
            resource=TOKEN,
            token_type=TokenType.FIXED,
            supply=10**21,
            minter=None,
            name="Gold",
            description="Shiny",
            url="https://gold.example",
            icon_url="https://gold.example/icon.png",
        )

    def test_mutable_supply(self):
        data = (
            bytes([0x03, 0x00])
            + _addr_hashed()
            + bytes([TokenType.MUTABLE])
            + OWNER_KEY
            + _token_metadata()
        )
        s = decode_substate(data)
        assert isinstance(s, TokenDefinition)
        assert s.token_type is TokenType.MUTABLE
        assert s.minter == OWNER_KEY
        assert s.supply is None

    def test_empty_strings(self):
        data = (
            bytes([0x03, 0x00])
            + NATIVE
            + bytes([TokenType.FIXED])
            + _u256(1)
            + _pack_u32(0) * 4
        )
        s = decode_substate(data)
        assert s.name == ""
        assert s.icon_url == ""

    def test_unknown_token_type(self):
        data = bytes([0x03, 0x00]) + NATIVE + bytes([0x02]) + _u256(1)
        with pytest.raises(MalformedField) as exc:
            decode_substate(data)
        assert exc.value.position == 1

    def test_string_length_past_end(self):
        data = bytes([0x03, 0x00]) + NATIVE + bytes([0x00]) + _u256(1) + _pack_u32(50) + b"Go"
        with pytest.raises(TruncatedInput):
            decode_substate(data)


class TestTokens:
    def test_deserialize(self):
        data = bytes([0x04, 0x00]) + _addr_hashed() + _addr_pub_key() + _u256(12345)
        s = decode_substate(data)
        assert s == Tokens(reserved=0, resource=TOKEN, holder=OWNER, amount=12345)

    def test_max_amount(self):
        data = bytes([0x04, 0x00]) + NATIVE + _addr_pub_key() + b"\xff" * 32
        s = decode_substate(data)
        assert s.amount == 2**256 - 1

    def test_truncated_amount(self):
        data = bytes([0x04, 0x00]) + NATIVE + _addr_pub_key() + b"\x00" * 31
        with pytest.raises(TruncatedInput) as exc:
            decode_substate(data)
        assert exc.value.what == "Tokens"
        assert exc.value.position == 1


class TestStake:
    @pytest.mark.parametrize(
        "tag,cls",
        [
            (0x05, PreparedStake),
            (0x06, StakeOwnership),
            (0x07, PreparedUnstake),
        ],
    )
    def test_deserialize(self, tag, cls):
        data = bytes([tag, 0x00]) + VALIDATOR_KEY + _addr_pub_key() + _u256(500)
        s = decode_substate(data)
        assert type(s) is cls
        assert s == cls(reserved=0, delegate=VALIDATOR_KEY, owner=OWNER, amount=500)
        assert s.TYPE_ID == tag

    def test_variants_are_distinct(self):
        body = bytes([0x00]) + VALIDATOR_KEY + _addr_pub_key() + _u256(500)
        assert decode_substate(bytes([0x05]) + body) != decode_substate(bytes([0x06]) + body)

    def test_exiting_stake(self):
        data = (
            bytes([0x08, 0x00])
            + _pack_u64(2**40 + 3)
            + VALIDATOR_KEY
            + _addr_pub_key()
            + _u256(77)
        )
        s = decode_substate(data)
        assert s == ExitingStake(
            reserved=0,
            epoch_unlocked=2**40 + 3,
            delegate=VALIDATOR_KEY,
            owner=OWNER,
            amount=77,
        )


class TestValidator:
    def test_allow_delegation_flag(self):
        s = decode_substate(bytes([0x0C, 0x00]) + VALIDATOR_KEY + bytes([0x01]))
        assert s == ValidatorAllowDelegationFlag(
            reserved=0, validator=VALIDATOR_KEY, allow_delegation=True
        )

    def test_registered_flag_copy(self):
        s = decode_substate(bytes([0x0D, 0x00]) + VALIDATOR_KEY + bytes([0x00]))
        assert s == ValidatorRegisteredFlagCopy(
            reserved=0, validator=VALIDATOR_KEY, is_registered=False
        )

    def test_prepared_registered_flag_update(self):
        s = decode_substate(bytes([0x0E, 0x00]) + VALIDATOR_KEY + bytes([0x01]))
        assert s == PreparedRegisteredFlagUpdate(
            reserved=0, validator=VALIDATOR_KEY, is_registered=True
        )

    def test_owner_copy(self):
        s = decode_substate(bytes([0x11, 0x00]) + VALIDATOR_KEY + _addr_pub_key())
        assert s == ValidatorOwnerCopy(reserved=0, validator=VALIDATOR_KEY, owner=OWNER)

    def test_reserved_byte_is_kept(self):
        s = decode_substate(bytes([0x0C, 0x07]) + VALIDATOR_KEY + bytes([0x00]))
        assert s.reserved == 7

    def test_missing_flag(self):
        with pytest.raises(TruncatedInput):
            decode_substate(bytes([0x0D, 0x00]) + VALIDATOR_KEY)


class TestTagClosure:
    def test_known_tags(self):
        assert sorted(t.value for t in SubstateTypeId) == [
            0x00, 0x03, 0x04, 0x05, 0x06, 0x07, 0x08, 0x0C, 0x0D, 0x0E, 0x11,
        ]

    @pytest.mark.parametrize(
        "tag",
        [t for t in range(256) if t not in {0x00, 0x03, 0x04, 0x05, 0x06, 0x07, 0x08, 0x0C, 0x0D, 0x0E, 0x11}],
    )
    def test_unknown_tag(self, tag):
        with pytest.raises(UnknownStateEntryTag) as exc:
            decode_substate(bytes([tag]) + b"\x00" * 64)
        assert exc.value.tag == tag
        assert exc.value.position == 0

    def test_unknown_tag_position_mid_buffer(self):
        r = ByteCursor(bytes([0xAA, 0xBB, 0x01]))
        r.read_u8()
        r.read_u8()
        with pytest.raises(UnknownStateEntryTag) as exc:
            read_substate(r)
        assert exc.value.position == 2

    def test_empty(self):
        with pytest.raises(TruncatedInput):
            decode_substate(b"")

    def test_enum_strings(self):
        assert str(SubstateTypeId.EXITING_STAKE) == "exiting_stake"
        assert str(REAddressType.NATIVE_TOKEN) == "native-token"


class TestReadSubstate:
    def test_leaves_cursor_after_entry(self):
        r = ByteCursor(bytes([0x00]) + NATIVE + bytes([0xEE]))
        read_substate(r)
        assert r.offset == 2
        assert r.read_u8() == 0xEE

    def test_decode_rejects_trailing_bytes(self):
        with pytest.raises(TrailingBytes) as exc:
            decode_substate(bytes([0x00]) + NATIVE + bytes([0xEE, 0xEF]))
        assert exc.value.position == 2
        assert exc.value.remaining == 2
