"""Merkle whitelist for the land sale: root, per-land proofs, verification."""
from .errors import EmptyInputError, LeafNotFoundError, RecordFormatError, WhitelistError
from .merkle import Level, MerkleTree, build_leaves, build_tree, get_proof, verify
from .schemas import LandRecord, LandWithProof, calculate_land_hash

__all__ = [
    "EmptyInputError", "LeafNotFoundError", "RecordFormatError", "WhitelistError",
    "Level", "MerkleTree", "build_leaves", "build_tree", "get_proof", "verify",
    "LandRecord", "LandWithProof", "calculate_land_hash",
]
