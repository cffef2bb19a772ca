"""
cli.py - whitelist-proofs command line.

  whitelist-proofs generate [--lands FILE] [--chain-id ID] [--out FILE]
      Build the tree over the sale's lands, print the root, and write every
      land with its proof.

  whitelist-proofs verify [--proofs FILE] [--root 0x...]
      Check every proof in a landsWithProof file. Without --root the root is
      rebuilt from the file's own lands. Exit status 1 on any failure.
"""
import argparse
import logging
import sys
from typing import Optional, Sequence

from . import config
from .errors import WhitelistError
from .hashing import from_hex, to_hex
from .merkle import MerkleTree, verify
from .records import (
    attach_proofs, load_lands, load_lands_with_proof, proofs_path,
    sale_deployment_path, write_lands_with_proof,
)

log = logging.getLogger("whitelist.cli")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def cmd_generate(args: argparse.Namespace) -> int:
    lands_file = args.lands or config.LANDS_FILE or sale_deployment_path(args.chain_id, args.deployments)
    lands = load_lands(lands_file)
    tree = MerkleTree.from_records(lands)
    log.info("merkle root=%s depth=%d leaves=%d", tree.hex_root, tree.depth, len(tree.leaves))

    with_proof = attach_proofs(tree, lands, workers=args.workers)
    out = args.out or proofs_path(args.chain_id, args.deployments)
    write_lands_with_proof(out, with_proof)
    print(tree.hex_root)
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    path = args.proofs or proofs_path(args.chain_id, args.deployments)
    entries = load_lands_with_proof(path)
    if args.root:
        root = from_hex(args.root)
    else:
        root = MerkleTree.from_records([e.land() for e in entries]).root
    print(f"Root      : {to_hex(root)}")
    print(f"Lands     : {len(entries)}\n")

    failed = 0
    for entry in entries:
        ok = verify(entry.land(), entry.proof, root)
        label = f"({entry.x},{entry.y}) size={entry.size}"
        print(f"  {'PASS' if ok else 'FAIL'}  {label}")
        if not ok:
            failed += 1

    print(f"\nPASS: {len(entries) - failed}  FAIL: {failed}  TOTAL: {len(entries)}")
    return 1 if failed else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="whitelist-proofs",
                                     description="Land sale Merkle whitelist")
    parser.add_argument("--chain-id", default=config.CHAIN_ID)
    parser.add_argument("--deployments", default=config.DEPLOYMENTS_DIR,
                        help="Root of per-chain deployment folders")
    parser.add_argument("--log-level", default=config.LOG_LEVEL, type=str.upper, choices=LOG_LEVELS)
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Compute the root and write proofs")
    gen.add_argument("--lands", help="Land list JSON (default: $LANDS_FILE, else <deployments>/<chain>/LandSale.json)")
    gen.add_argument("--out", help="Output file (default: <deployments>/<chain>/data/landsWithProof.json)")
    gen.add_argument("--workers", type=int, default=config.PROOF_WORKERS)
    gen.set_defaults(func=cmd_generate)

    ver = sub.add_parser("verify", help="Check every proof in a landsWithProof file")
    ver.add_argument("--proofs", help="landsWithProof JSON to check")
    ver.add_argument("--root", help="Expected root (0x-prefixed); rebuilt from the file if omitted")
    ver.set_defaults(func=cmd_verify)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        logging.basicConfig(
            level=args.log_level,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )
        return args.func(args)
    except (WhitelistError, ValueError, OSError) as exc:
        log.error("%s failed: %s", args.command, exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
