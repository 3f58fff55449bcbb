"""
End-to-end membership proofs at the production depth of 32.

Tree holds a single leaf {id: 1, balance: 684} at index 10; every other slot is
the default leaf.
"""

import random
import sys

import pytest

import prove_membership
from primitives.leaf import Leaf
from protocol.circuit import MerklePathAuthCircuit
from protocol.config import CircuitConfig
from protocol.prover import create_proof, generate_parameters
from protocol.verifier import verify_proof
from protocol.witness_generation import generate_random_tree, generate_witness, new_account_tree
from witness.base import Witness

POSITION = 10


@pytest.fixture(scope="module")
def config() -> CircuitConfig:
    return CircuitConfig()


@pytest.fixture(scope="module")
def keys(config, hasher):
    return generate_parameters(MerklePathAuthCircuit.blank(hasher, config))


@pytest.fixture(scope="module")
def single_leaf_tree(config, hasher):
    tree = new_account_tree(config, hasher)
    tree.insert(POSITION, Leaf(id=1, balance=684))
    return tree


class TestDepth32:
    """The reference scenario."""

    def test_position_10_verifies(self, single_leaf_tree, keys, hasher, config) -> None:
        circuit, root = generate_witness(single_leaf_tree, POSITION, hasher, config)
        proof = create_proof(circuit, keys)
        assert verify_proof(keys.vk, proof, [root])

    def test_position_11_with_path_of_10_fails(self, single_leaf_tree, keys, hasher, config) -> None:
        circuit, root = generate_witness(single_leaf_tree, POSITION, hasher, config)
        wrong = MerklePathAuthCircuit(
            hasher,
            config,
            root=circuit.root,
            leaf=circuit.leaf,
            path=circuit.path,
            position=Witness.known(POSITION + 1),
        )
        proof = create_proof(wrong, keys)
        assert not verify_proof(keys.vk, proof, [root])

    def test_random_tree(self, keys, hasher, config) -> None:
        tree = generate_random_tree(config, hasher, rng=random.Random(2024))
        assert len(tree) == 100

        circuit, root = generate_witness(tree, 42, hasher, config)
        assert verify_proof(keys.vk, create_proof(circuit, keys), [root])


def test_cli_small_tree(monkeypatch, tmp_path, capsys) -> None:
    """prove_membership exits 0 when the proof verifies and the wrong position is rejected."""
    proof_path = tmp_path / "proof.json"
    monkeypatch.setattr(sys, "argv", [
        "prove_membership.py",
        "--position", "3",
        "--depth", "4",
        "--n-leaves", "6",
        "--seed", "1",
        "--wrong-position",
        "--proof-out", str(proof_path),
    ])
    with pytest.raises(SystemExit) as excinfo:
        prove_membership.main()

    assert excinfo.value.code == 0
    assert proof_path.exists()
    out = capsys.readouterr().out
    assert "Valid: True" in out
    assert "Rejected: True" in out


def test_cli_rejects_more_leaves_than_slots(monkeypatch, capsys) -> None:
    """--n-leaves above 2^depth is reported, not raised."""
    monkeypatch.setattr(sys, "argv", [
        "prove_membership.py",
        "--position", "0",
        "--depth", "2",
        "--n-leaves", "6",
    ])
    with pytest.raises(SystemExit) as excinfo:
        prove_membership.main()

    assert excinfo.value.code == 1
    assert "Error: Cannot insert 6 leaves into a tree of depth 2" in capsys.readouterr().err
