#!/usr/bin/env python3
"""
Key-Value Vector Commitment Demo
================================

Walks through the full lifecycle of a committed key-value vector:

1. Set up the RSA group
2. Commit to sensor readings at keys 0..3
3. Open and verify one key
4. Show that a wrong key or a wrong value is rejected
5. Update a key (bits flip in both directions)
6. Verify the new value; the old value no longer verifies
"""

import argparse
import sys
import os

# Add the parent directory to the path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from rsa_accumulator import setup
from vc_protocol import commit, open_at_key, verify_at_key, update, update_product, get_key_value_elem
from vc_serialization import serialize_witnesses, to_json


def main():
    parser = argparse.ArgumentParser(description="Key-value vector commitment demo")
    parser.add_argument('--secparam', type=int, default=512,
                        help="Bit length of each RSA prime factor (default: 512)")
    args = parser.parse_args()

    print("=" * 70)
    print("Key-Value Vector Commitment Demo")
    print("=" * 70)
    print()

    # 1. Setup
    print("[1] Setting up RSA group...")
    params = setup(args.secparam)
    base = params['g']
    print(f"✅ {params['modulus_bits']}-bit modulus, base g = {base}")
    print()

    # 2. Commit
    print("[2] Committing to readings...")
    keys = [0, 1, 2, 3]
    values = [4, 7, 200, 0]
    digest, product = commit(base, keys, values, params)
    print(f"✅ Committed {dict(zip(keys, values))}")
    print(f"    - digest: {hex(digest)[:34]}...")
    print()

    # 3. Open and verify
    print("[3] Opening key 1...")
    pi_i, pi_e = open_at_key(base, product, 1, 7, params)
    is_valid = verify_at_key(base, digest, 1, 7, pi_i, pi_e, params)
    print(f"✅ (1, 7) verifies: {is_valid}")
    print(f"    - proof size: {len(to_json(serialize_witnesses(pi_i, pi_e)))} bytes (JSON)")
    print()

    # 4. Tampered claims
    print("[4] Reusing the proof for other claims...")
    print(f"    - (0, 7): {verify_at_key(base, digest, 0, 7, pi_i, pi_e, params)}")
    print(f"    - (1, 4): {verify_at_key(base, digest, 1, 4, pi_i, pi_e, params)}")
    print()

    # 5. Update
    print("[5] Updating key 1: 7 -> 9...")
    new_digest = update(base, digest, product, [1], [9], params)
    new_product = update_product(product, [1], [9])
    print(f"✅ new digest: {hex(new_digest)[:34]}...")
    print()

    # 6. Verify after update
    print("[6] Verifying after update...")
    pi_i, pi_e = open_at_key(base, new_product, 1, 9, params)
    print(f"    - (1, 9): {verify_at_key(base, new_digest, 1, 9, pi_i, pi_e, params)}")
    print(f"    - (1, 7): {verify_at_key(base, new_digest, 1, 7, pi_i, pi_e, params)}")
    print()

    # Manual check of the group relation
    elem = get_key_value_elem(2, 200)
    single, _ = commit(base, [2], [200], params)
    assert single == pow(base, elem, params['N'])
    print("✅ g^elem(2, 200) matches commit(g, [2], [200])")

    print()
    print("=" * 70)
    print("Demo complete")
    print("=" * 70)


if __name__ == "__main__":
    main()
