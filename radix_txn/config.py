"""Wire-format constants for Radix ledger transactions."""

BYTE_ORDER = "big"

BLOB_LENGTH_PREFIX_SIZE = 4
PUBLIC_KEY_SIZE = 33
HASHED_KEY_NONCE_SIZE = 26
UINT256_SIZE = 32

SIGNATURE_SIZE = 65  # v + r + s
TXN_ID_SIZE = 32
SUBSTATE_ID_SIZE = TXN_ID_SIZE + 4
