"""
Tests for the land source and the landsWithProof sink.
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import json

import pytest

from whitelist.errors import RecordFormatError
from whitelist.merkle import MerkleTree, verify
from whitelist.records import (
    attach_proofs, load_lands, load_lands_with_proof, proofs_path,
    sale_deployment_path, write_lands_with_proof,
)

LANDS = [
    {"x": 0, "y": 0, "size": 1, "price": "1000000000000000000"},
    {"x": 1, "y": 0, "size": 1, "price": "1000000000000000000"},
    {"x": 3, "y": 0, "size": 3, "price": "8000000000000000000",
     "reserved": "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"},
    {"x": 6, "y": 0, "size": 6, "price": "30000000000000000000"},
    {"x": 12, "y": 0, "size": 12, "price": "110000000000000000000", "name": "estate"},
]


def test_paths(tmp_path):
    assert proofs_path("4", tmp_path) == tmp_path / "4" / "data" / "landsWithProof.json"
    assert sale_deployment_path("4", tmp_path) == tmp_path / "4" / "LandSale.json"


def test_load_from_deployment_file(tmp_path):
    path = tmp_path / "LandSale.json"
    path.write_text(json.dumps({"address": "0x" + "11" * 20, "data": LANDS}))
    lands = load_lands(path)
    assert [(l.x, l.size) for l in lands] == [(0, 1), (1, 1), (3, 3), (6, 6), (12, 12)]


def test_load_from_bare_list(tmp_path):
    path = tmp_path / "lands.json"
    path.write_text(json.dumps(LANDS))
    assert len(load_lands(path)) == len(LANDS)


def test_invalid_land_names_its_index(tmp_path):
    path = tmp_path / "lands.json"
    path.write_text(json.dumps(LANDS + [{"x": 0, "y": 0, "size": 5, "price": "1"}]))
    with pytest.raises(RecordFormatError, match="#5"):
        load_lands(path)


@pytest.mark.parametrize("content", ["not json", '{"address": "0x0"}', '"lands"'])
def test_unreadable_source_rejected(tmp_path, content):
    path = tmp_path / "lands.json"
    path.write_text(content)
    with pytest.raises(RecordFormatError):
        load_lands(path)


def test_attach_proofs_keeps_order_and_verifies(tmp_path):
    path = tmp_path / "lands.json"
    path.write_text(json.dumps(LANDS))
    lands = load_lands(path)
    tree = MerkleTree.from_records(lands)
    with_proof = attach_proofs(tree, lands)
    assert [w.land() for w in with_proof] == lands
    for w in with_proof:
        assert len(w.proof) == tree.depth - 1
        assert all(p.startswith("0x") and len(p) == 66 for p in w.proof)
        assert verify(w.land(), w.proof, tree.root)


def test_parallel_proofs_match_serial(tmp_path):
    path = tmp_path / "lands.json"
    path.write_text(json.dumps(LANDS))
    lands = load_lands(path)
    tree = MerkleTree.from_records(lands)
    assert attach_proofs(tree, lands, workers=4) == attach_proofs(tree, lands)


def test_sink_round_trip(tmp_path):
    src = tmp_path / "lands.json"
    src.write_text(json.dumps(LANDS))
    lands = load_lands(src)
    tree = MerkleTree.from_records(lands)

    out = write_lands_with_proof(proofs_path("1", tmp_path), attach_proofs(tree, lands))
    assert out.exists()

    written = json.loads(out.read_text())
    assert written[4]["name"] == "estate"
    assert written[0]["price"] == "1000000000000000000"

    loaded = load_lands_with_proof(out)
    for entry in loaded:
        assert verify(entry, entry.proof, tree.root)
