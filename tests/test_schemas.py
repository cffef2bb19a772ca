"""
Unit tests for land records and their packed leaf encoding.
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from pydantic import ValidationError
from web3 import Web3

from whitelist.schemas import (
    LAND_ABI_TYPES, ZERO_ADDRESS, ZERO_SALT, LandRecord, LandWithProof, calculate_land_hash,
)

BUYER = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"


def test_land_hash_matches_packed_encoding():
    land = LandRecord(x=12, y=240, size=3, price="1000000000000000000", reserved=BUYER)
    expected = Web3.solidity_keccak(
        list(LAND_ABI_TYPES),
        [12, 240, 3, 10**18, BUYER, bytes(32)],
    )
    assert calculate_land_hash(land) == bytes(expected)


def test_defaults():
    land = LandRecord(x=0, y=0, size=1, price=0)
    assert land.reserved == ZERO_ADDRESS
    assert land.salt == ZERO_SALT


def test_reserved_is_checksummed():
    land = LandRecord(x=0, y=0, size=1, price=0, reserved=BUYER.lower())
    assert land.reserved == BUYER


def test_price_accepts_decimal_and_hex_strings():
    assert LandRecord(x=0, y=0, size=1, price="255").price == 255
    assert LandRecord(x=0, y=0, size=1, price="0xff").price == 255


def test_price_serialised_as_string():
    dumped = LandRecord(x=1, y=2, size=1, price=10**24).model_dump()
    assert dumped["price"] == str(10**24)


def test_short_salt_is_left_padded():
    land = LandRecord(x=0, y=0, size=1, price=0, salt="0x01")
    assert land.salt == "0x" + "0" * 62 + "01"


@pytest.mark.parametrize("field,value", [
    ("size", 2),
    ("x", -1),
    ("x", 2**256),
    ("y", 2**256),
    ("price", str(2**256)),
    ("price", "-5"),
    ("reserved", "0x1234"),
    ("salt", "deadbeef"),
    ("salt", "0x" + "f" * 65),
])
def test_invalid_lands_rejected(field, value):
    data = {"x": 0, "y": 0, "size": 1, "price": 0, field: value}
    with pytest.raises(ValidationError):
        LandRecord(**data)


def test_extra_fields_do_not_change_the_hash():
    plain = LandRecord(x=5, y=6, size=1, price=1)
    tagged = LandRecord(x=5, y=6, size=1, price=1, name="corner plot")
    assert calculate_land_hash(plain) == calculate_land_hash(tagged)
    assert tagged.model_dump()["name"] == "corner plot"


def test_land_with_proof_hashes_like_its_land():
    land = LandRecord(x=5, y=6, size=6, price=1)
    with_proof = LandWithProof(**land.model_dump(), proof=["0x" + "ab" * 32])
    assert calculate_land_hash(with_proof) == calculate_land_hash(land)
    assert with_proof.land() == land


def test_largest_uint256_values_accepted():
    top = 2**256 - 1
    land = LandRecord(x=top, y=top, size=1, price=str(top))
    expected = Web3.solidity_keccak(list(LAND_ABI_TYPES), [top, top, 1, top, ZERO_ADDRESS, bytes(32)])
    assert calculate_land_hash(land) == bytes(expected)
