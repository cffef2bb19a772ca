"""
records.py - Land list source and proof sink.

Source: a deployment file for the sale contract ({"data": [...lands]}) or a
        bare JSON list of lands.
Sink:   <deployments>/<chain_id>/data/landsWithProof.json, every original
        land with its proof attached, in input order.
"""
import json
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Sequence, Union

from pydantic import ValidationError

from . import config
from .errors import RecordFormatError
from .hashing import to_hex
from .merkle import MerkleTree
from .schemas import LandRecord, LandWithProof

log = logging.getLogger("whitelist.records")

PathLike = Union[str, Path]


def sale_deployment_path(chain_id: str = config.CHAIN_ID,
                         deployments_dir: PathLike = config.DEPLOYMENTS_DIR) -> Path:
    return Path(deployments_dir) / str(chain_id) / f"{config.SALE_DEPLOYMENT}.json"


def proofs_path(chain_id: str = config.CHAIN_ID,
                deployments_dir: PathLike = config.DEPLOYMENTS_DIR) -> Path:
    return Path(deployments_dir) / str(chain_id) / "data" / config.PROOFS_FILENAME


def _read_entries(path: PathLike) -> list:
    try:
        doc = json.loads(Path(path).read_text())
    except json.JSONDecodeError as exc:
        raise RecordFormatError(f"{path}: invalid JSON: {exc}") from exc
    if isinstance(doc, dict):
        doc = doc.get("data")
    if not isinstance(doc, list):
        raise RecordFormatError(f"{path}: expected a list of lands or a deployment with 'data'")
    return doc


def _parse(entries: list, model, path: PathLike) -> list:
    parsed = []
    for i, entry in enumerate(entries):
        try:
            parsed.append(model.model_validate(entry))
        except ValidationError as exc:
            raise RecordFormatError(f"{path}: land #{i} is invalid: {exc}") from exc
    return parsed


def load_lands(path: PathLike) -> list[LandRecord]:
    lands = _parse(_read_entries(path), LandRecord, path)
    log.info("loaded %d lands from %s", len(lands), path)
    return lands


def load_lands_with_proof(path: PathLike) -> list[LandWithProof]:
    return _parse(_read_entries(path), LandWithProof, path)


def attach_proofs(tree: MerkleTree, lands: Sequence[LandRecord],
                  workers: int = 1) -> list[LandWithProof]:
    """Derive one proof per land. The tree is read-only, so workers share it."""
    def _one(land: LandRecord) -> LandWithProof:
        proof = [to_hex(h) for h in tree.get_proof(land)]
        return LandWithProof.model_validate({**land.model_dump(), "proof": proof})

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(_one, lands))
    return [_one(land) for land in lands]


def write_lands_with_proof(path: PathLike, lands: Sequence[LandWithProof]) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps([land.model_dump() for land in lands], indent=2))
    log.info("wrote %d lands with proof -> %s", len(lands), out)
    return out
