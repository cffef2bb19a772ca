"""
errors.py - Exceptions raised by the whitelist engine.

Construction and proof errors point at structural data problems and are
never retried. Verification does not raise; a bad proof returns False.
"""


class WhitelistError(Exception):
    """Base class for every error raised by this package."""


class EmptyInputError(WhitelistError, ValueError):
    def __init__(self, what: str = "records"):
        super().__init__(f"cannot build a Merkle tree from zero {what}")


class LeafNotFoundError(WhitelistError, LookupError):
    """The record's leaf is not part of the committed set."""

    def __init__(self, leaf: bytes):
        self.leaf = leaf
        super().__init__(f"leaf not found in tree: 0x{leaf.hex()}")


class RecordFormatError(WhitelistError, ValueError):
    """A source record or a proof file entry could not be parsed."""
