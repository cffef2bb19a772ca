"""
schemas.py - Land sale records.

A LandRecord is the whitelist entry a buyer presents to the LandSale
contract. Its leaf is keccak256(abi.encodePacked(...)) over LAND_ABI_TYPES,
in exactly this field order. Changing the order or a type breaks every proof
without any local failure.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from web3 import Web3

from .hashing import HASH_SIZE, UINT256_LIMIT, hash_record

ZERO_ADDRESS = "0x" + "00" * 20
ZERO_SALT = "0x" + "00" * HASH_SIZE

# Quad sizes the sale contract accepts.
LAND_SIZES = (1, 3, 6, 12, 24)

LAND_ABI_TYPES = ("uint256", "uint256", "uint256", "uint256", "address", "bytes32")


class LandRecord(BaseModel):
    """One parcel (or quad) offered in the sale."""
    model_config = ConfigDict(frozen=True, extra="allow")

    x:        int = Field(..., ge=0, lt=UINT256_LIMIT)
    y:        int = Field(..., ge=0, lt=UINT256_LIMIT)
    size:     int
    price:    int = Field(..., ge=0, lt=UINT256_LIMIT, description="Price in wei; JSON keeps it as a decimal string")
    reserved: str = Field(default=ZERO_ADDRESS, description="Only this address may buy, if set")
    salt:     str = Field(default=ZERO_SALT)

    @field_validator("size")
    @classmethod
    def validate_size(cls, v: int) -> int:
        if v not in LAND_SIZES:
            raise ValueError(f"size must be one of {LAND_SIZES}, got {v}")
        return v

    @field_validator("price", mode="before")
    @classmethod
    def parse_price(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return int(v, 16) if v.startswith("0x") else int(v)
        return v

    @field_validator("reserved", mode="before")
    @classmethod
    def validate_reserved(cls, v: Any) -> str:
        if v is None or v == "":
            return ZERO_ADDRESS
        if not isinstance(v, str) or not Web3.is_address(v):
            raise ValueError(f"reserved must be an EVM address, got {v!r}")
        return Web3.to_checksum_address(v)

    @field_validator("salt", mode="before")
    @classmethod
    def validate_salt(cls, v: Any) -> str:
        if v is None or v == "":
            return ZERO_SALT
        if not isinstance(v, str) or not v.startswith("0x"):
            raise ValueError("salt must be a 0x-prefixed bytes32 hex string")
        body = v[2:]
        if len(body) > HASH_SIZE * 2:
            raise ValueError(f"salt too long for bytes32: {len(body)} chars")
        try:
            bytes.fromhex(body.zfill(HASH_SIZE * 2))
        except ValueError as exc:
            raise ValueError(f"salt is not hex: {v!r}") from exc
        return "0x" + body.lower().zfill(HASH_SIZE * 2)

    @field_serializer("price")
    def serialize_price(self, v: int) -> str:
        return str(v)

    def abi_types(self) -> tuple[str, ...]:
        return LAND_ABI_TYPES

    def abi_values(self) -> tuple[Any, ...]:
        return (
            self.x, self.y, self.size, self.price,
            self.reserved, bytes.fromhex(self.salt[2:]),
        )


class LandWithProof(LandRecord):
    """A land as written to landsWithProof.json."""
    proof: list[str] = Field(default_factory=list)

    def land(self) -> LandRecord:
        return LandRecord.model_validate(self.model_dump(exclude={"proof"}))


def calculate_land_hash(land: LandRecord) -> bytes:
    """Leaf hash of a land, identical to the contract's _generateLandHash."""
    return hash_record(land)
