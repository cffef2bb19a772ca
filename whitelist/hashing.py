"""
hashing.py - The hash function H shared with the on-chain verifier.

Every hash in the whitelist goes through this module so that the off-chain
tree and the LandSale contract agree bit-for-bit.

Encoding rules (web3 soliditySha3 auto-detection):
  bytes                 -> bytes   (raw)
  "0x..." hex string    -> bytes   (decoded)
  other str             -> string  (UTF-8)
  int                   -> uint256
  bool                  -> bool
  obj.abi_types()/abi_values() -> tight packed encoding of the typed fields

Pair:   keccak256(left || right)   - positional, both bytes32
Order:  hashes compare as unsigned big-endian integers
"""
from typing import Any

from web3 import Web3

HASH_SIZE = 32
UINT256_LIMIT = 2 ** 256


def _is_hex(value: str) -> bool:
    if not value.startswith(("0x", "0X")):
        return False
    body = value[2:]
    if len(body) % 2:
        return False
    try:
        bytes.fromhex(body)
    except ValueError:
        return False
    return True


def abi_encode_record(record: Any) -> tuple[list[str], list[Any]]:
    """Return the (types, values) pair used to pack a record for hashing."""
    if hasattr(record, "abi_types") and hasattr(record, "abi_values"):
        return list(record.abi_types()), list(record.abi_values())
    if isinstance(record, (bytes, bytearray)):
        return ["bytes"], [bytes(record)]
    if isinstance(record, str):
        if _is_hex(record):
            return ["bytes"], [Web3.to_bytes(hexstr=record)]
        return ["string"], [record]
    # bool before int: bool is an int subclass
    if isinstance(record, bool):
        return ["bool"], [record]
    if isinstance(record, int):
        if record < 0:
            raise ValueError(f"negative integers have no uint256 encoding: {record}")
        if record >= UINT256_LIMIT:
            raise ValueError(f"integer does not fit in uint256: {record}")
        return ["uint256"], [record]
    raise TypeError(f"no packed encoding for record of type {type(record).__name__}")


def hash_record(record: Any) -> bytes:
    """H(record): keccak-256 of the record's tight packed encoding."""
    types, values = abi_encode_record(record)
    return bytes(Web3.solidity_keccak(types, values))


def hash_pair(left: bytes, right: bytes) -> bytes:
    """H(left, right) in the given order. Used for tree construction."""
    return bytes(Web3.solidity_keccak(["bytes32", "bytes32"], [left, right]))


def hash_sorted_pair(a: bytes, b: bytes) -> bytes:
    """H(min, max). Used by the verifier, which never knows a node's side."""
    lo, hi = (a, b) if as_uint(a) <= as_uint(b) else (b, a)
    return hash_pair(lo, hi)


def as_uint(h: bytes) -> int:
    """Ordering key: the hash read as an unsigned big-endian integer."""
    return int.from_bytes(h, "big")


def sort_hashes(hashes) -> list[bytes]:
    return sorted(hashes, key=as_uint)


def to_hex(h: bytes) -> str:
    return Web3.to_hex(h)


def from_hex(value: str) -> bytes:
    """Decode a 0x-prefixed bytes32 hex string."""
    if not isinstance(value, str) or not _is_hex(value):
        raise ValueError(f"not a 0x-prefixed hex string: {value!r}")
    raw = Web3.to_bytes(hexstr=value)
    if len(raw) != HASH_SIZE:
        raise ValueError(f"expected {HASH_SIZE} bytes, got {len(raw)}")
    return raw
