#!/usr/bin/env python3
"""
Prove membership of one leaf in a randomly filled sparse Merkle tree.

Builds a tree with random leaves at indices 0..n-1, runs setup on the blank
circuit, proves the leaf at --position, and verifies the proof against the root.
With --wrong-position, also proves the same leaf and path under the neighbouring
position, which must fail verification.

Usage:
    python prove_membership.py \
        --position 10 \
        --depth 32 \
        --n-leaves 100 \
        [--seed 42] [--config circuit.json] [--wrong-position] [--proof-out proof.json]
"""

import argparse
import random
import sys
import time
from pathlib import Path

from constraints.base import CircuitShapeError
from constraints.hasher import Poseidon2Hash
from primitives.poseidon2 import Poseidon2Params
from protocol.circuit import MerklePathAuthCircuit
from protocol.config import TREE_DEPTH, CircuitConfig
from protocol.proof import save_proof
from protocol.prover import create_proof, generate_parameters
from protocol.verifier import verify_proof
from protocol.witness_generation import DEFAULT_N_LEAVES, generate_random_tree, generate_witness
from witness.base import Witness


def main():
    parser = argparse.ArgumentParser(
        description='Prove and verify Merkle-path membership of a tree leaf'
    )
    parser.add_argument(
        '--position',
        type=int,
        default=10,
        help='Index of the leaf to prove'
    )
    parser.add_argument(
        '--depth',
        type=int,
        default=None,
        help=f'Tree depth (default {TREE_DEPTH}, or the value in --config)'
    )
    parser.add_argument(
        '--n-leaves',
        type=int,
        default=DEFAULT_N_LEAVES,
        help='Number of random leaves inserted at indices 0..n-1'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Seed for the random leaves'
    )
    parser.add_argument(
        '--config',
        type=Path,
        default=None,
        help='Path to circuit config JSON'
    )
    parser.add_argument(
        '--wrong-position',
        action='store_true',
        help='Also prove the leaf under position ^ 1 and check that verification fails'
    )
    parser.add_argument(
        '--proof-out',
        type=Path,
        default=None,
        help='Write the proof JSON here'
    )

    args = parser.parse_args()

    try:
        config = CircuitConfig.from_json(str(args.config)) if args.config else CircuitConfig()
        if args.depth is not None:
            config = CircuitConfig(args.depth, config.id_bit_length, config.balance_bit_length)
    except (CircuitShapeError, OSError, ValueError) as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    if not 0 < args.n_leaves <= 1 << config.tree_depth:
        print(f"Error: Cannot insert {args.n_leaves} leaves into a tree of depth {config.tree_depth}", file=sys.stderr)
        sys.exit(1)

    if not 0 <= args.position < args.n_leaves:
        print(f"Error: Position {args.position} is not among the {args.n_leaves} inserted leaves", file=sys.stderr)
        sys.exit(1)

    hasher = Poseidon2Hash(Poseidon2Params.default())

    print(f"Building tree (depth {config.tree_depth}, {args.n_leaves} leaves)...")
    tree = generate_random_tree(config, hasher, args.n_leaves, random.Random(args.seed))
    circuit, public_input = generate_witness(tree, args.position, hasher, config)

    print("Running setup...")
    start = time.perf_counter()
    params = generate_parameters(MerklePathAuthCircuit.blank(hasher, config))
    print(f"  Constraints: {len(params.vk.constraints)}")
    print(f"  Aux variables: {params.vk.num_aux}")
    print(f"  Setup time: {time.perf_counter() - start:.2f}s")

    print(f"Proving leaf at position {args.position}...")
    start = time.perf_counter()
    proof = create_proof(circuit, params)
    print(f"  Proving time: {time.perf_counter() - start:.2f}s")

    print("Verifying...")
    ok = verify_proof(params.vk, proof, [public_input])
    print(f"  Valid: {ok}")

    if args.proof_out:
        save_proof(proof, str(args.proof_out))
        print(f"Written proof to {args.proof_out}")

    if args.wrong_position:
        wrong = args.position ^ 1
        print(f"Proving same leaf and path under position {wrong}...")
        bad_circuit = MerklePathAuthCircuit(
            hasher,
            config,
            root=circuit.root,
            leaf=circuit.leaf,
            path=circuit.path,
            position=Witness.known(wrong),
        )
        bad_proof = create_proof(bad_circuit, params)
        rejected = not verify_proof(params.vk, bad_proof, [public_input])
        print(f"  Rejected: {rejected}")
        ok = ok and rejected

    sys.exit(0 if ok else 1)


if __name__ == '__main__':
    main()
