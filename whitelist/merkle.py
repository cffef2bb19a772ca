"""
merkle.py - Sorted-level Merkle tree over keccak-256 record hashes.

The root commits to the whole whitelist and is stored in the LandSale
contract. Each buyer presents their record plus a proof; the contract
recomputes the root with sorted-pair hashing.

Canonical tree:
  Leaves:  records padded to an even count (last record duplicated),
           hashed, then sorted ascending -> root ignores input order
           except for which record is last in an odd-sized list.
  Levels:  consecutive nodes of the current sequence are paired and hashed
           positionally, H(left, right). An odd trailing node is paired
           with itself. Each level is kept twice: in construction order
           and sorted; the sorted view feeds the next level.
  Root:    the single node of the top level.

Proofs walk the construction view to find a node's parent, then jump to
the parent's position in the sorted view, which is where the next level
paired it.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

from .errors import EmptyInputError, LeafNotFoundError
from .hashing import (
    HASH_SIZE, as_uint, from_hex, hash_pair, hash_record, hash_sorted_pair,
    sort_hashes, to_hex,
)

log = logging.getLogger("whitelist.merkle")

ProofElement = Union[bytes, str]


@dataclass(frozen=True)
class Pair:
    """Two nodes hashed into one parent. right is None when self-paired."""
    left: bytes
    right: Optional[bytes] = None

    @property
    def self_paired(self) -> bool:
        return self.right is None

    def parent(self) -> bytes:
        if self.right is None:
            return hash_pair(self.left, self.left)
        return hash_pair(self.left, self.right)


def pair_nodes(nodes: Sequence[bytes]) -> list[Pair]:
    pairs = []
    for i in range(0, len(nodes), 2):
        if i + 1 < len(nodes):
            pairs.append(Pair(nodes[i], nodes[i + 1]))
        else:
            pairs.append(Pair(nodes[i]))
    return pairs


@dataclass(frozen=True)
class Level:
    """One level above the leaves: construction order and sorted order."""
    nodes: tuple[bytes, ...]
    sorted_nodes: tuple[bytes, ...]

    def __len__(self) -> int:
        return len(self.nodes)


@dataclass(frozen=True)
class MerkleTree:
    leaves: tuple[bytes, ...]
    levels: tuple[Level, ...]

    @classmethod
    def from_records(cls, records: Sequence[Any]) -> "MerkleTree":
        return build_tree(build_leaves(records))

    @property
    def root(self) -> bytes:
        return self.levels[-1].nodes[0]

    @property
    def hex_root(self) -> str:
        return to_hex(self.root)

    @property
    def depth(self) -> int:
        return len(self.levels) + 1

    def get_proof(self, record: Any) -> list[bytes]:
        return get_proof(self, record)

    def verify(self, record: Any, proof: Sequence[ProofElement]) -> bool:
        return verify(record, proof, self.root)


def build_leaves(records: Sequence[Any]) -> list[bytes]:
    """Hash records into an even-length, ascending list of leaves.

    Padding happens on the raw records, so an odd list gets a second copy
    of its last record before anything is hashed.
    """
    padded = list(records)
    if not padded:
        raise EmptyInputError("records")
    if len(padded) % 2:
        padded.append(padded[-1])
    return sort_hashes(hash_record(r) for r in padded)


def build_tree(leaves: Sequence[bytes]) -> MerkleTree:
    """Build every level above the (already sorted) leaves."""
    if not leaves:
        raise EmptyInputError("leaves")
    levels: list[Level] = []
    current = list(leaves)
    while len(current) > 1:
        parents = tuple(p.parent() for p in pair_nodes(current))
        ordered = tuple(sort_hashes(parents))
        levels.append(Level(nodes=parents, sorted_nodes=ordered))
        current = list(ordered)

    if not levels:
        # A lone leaf never comes out of build_leaves; self-pair it anyway.
        only = leaves[0]
        parent = Pair(only).parent()
        levels.append(Level(nodes=(parent,), sorted_nodes=(parent,)))

    tree = MerkleTree(leaves=tuple(leaves), levels=tuple(levels))
    log.debug("built tree: %d leaves depth=%d root=%s",
              len(tree.leaves), tree.depth, tree.hex_root[:18])
    return tree


def _sibling(nodes: Sequence[bytes], index: int) -> bytes:
    if index % 2:
        return nodes[index - 1]
    if index + 1 < len(nodes):
        return nodes[index + 1]
    # self-paired: the node is its own sibling, matching H(x, x)
    return nodes[index]


def get_proof(tree: MerkleTree, record: Any) -> list[bytes]:
    """Return the sibling hashes from the record's leaf up to below the root."""
    target = hash_record(record)
    try:
        index = tree.leaves.index(target)
    except ValueError:
        raise LeafNotFoundError(target) from None

    proof = [_sibling(tree.leaves, index)]
    current = index
    for level in tree.levels[:-1]:
        parent = level.nodes[current // 2]
        current = level.sorted_nodes.index(parent)
        proof.append(_sibling(level.sorted_nodes, current))
    return proof


def _as_hash(value: ProofElement) -> bytes:
    if isinstance(value, str):
        return from_hex(value)
    if isinstance(value, (bytes, bytearray)) and len(value) == HASH_SIZE:
        return bytes(value)
    raise ValueError(f"not a {HASH_SIZE}-byte hash: {value!r}")


def verify(record: Any, proof: Sequence[ProofElement], root: ProofElement) -> bool:
    """Recompute the root from record and proof with sorted-pair hashing."""
    try:
        candidate = hash_record(record)
        expected = _as_hash(root)
        for sibling in proof:
            candidate = hash_sorted_pair(candidate, _as_hash(sibling))
    except (TypeError, ValueError) as exc:
        log.debug("proof could not be evaluated: %s", exc)
        return False
    return as_uint(candidate) == as_uint(expected)
