"""
Test Suite for Key-Value Vector Commitments
===========================================

End-to-end tests of commit / open_at_key / verify_at_key / update on top of
the RSA accumulator engine.
"""

import random
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from rsa_accumulator import setup, binary, default_params, clear_default_params
from rsa_accumulator import groups
from rsa_accumulator.hashing import index_to_prime
from vc_config import config, RSA2048_MODULUS
from vc_encoder import to_binary
from vc_errors import EngineError, InvalidInput
from vc_protocol import (
    commit, open_at_key, verify_at_key, update, update_product, get_key_value_elem
)


@pytest.fixture(scope="module")
def params():
    return setup(512)


@pytest.fixture(scope="module")
def committed(params):
    """Commitment to {0: 4, 1: 7} over base g = 2."""
    base = params['g']
    digest, product = commit(base, [0, 1], [4, 7], params)
    return base, digest, product


def test_commit(params, committed):
    base, digest, _ = committed

    # Manual check: 4 sets bit 5 of key 0, 7 sets bits 13, 14, 15 of key 1
    check_product = index_to_prime(5) * index_to_prime(13) * index_to_prime(14) * index_to_prime(15)

    assert digest == pow(base, check_product, params['N'])


def test_commit_returns_product(committed):
    _, _, product = committed
    assert product == get_key_value_elem(0, 4) * get_key_value_elem(1, 7)


def test_commit_length_mismatch(params):
    with pytest.raises(InvalidInput):
        commit(params['g'], [0, 1], [4], params)


def test_vc_open_and_verify(params, committed):
    base, digest, product = committed

    pi_i, pi_e = open_at_key(base, product, 1, 7, params)

    assert verify_at_key(base, digest, 1, 7, pi_i, pi_e, params) is True
    assert verify_at_key(base, digest, 0, 7, pi_i, pi_e, params) is False
    assert verify_at_key(base, digest, 1, 4, pi_i, pi_e, params) is False


@pytest.mark.parametrize("key, value", [(0, 0), (0, 1), (3, 77), (10, 255), (1000, 128)])
def test_open_and_verify_single(params, key, value):
    base = params['g']
    digest, product = commit(base, [key], [value], params)
    pi_i, pi_e = open_at_key(base, product, key, value, params)

    assert verify_at_key(base, digest, key, value, pi_i, pi_e, params)
    for other_value in {0, 1, 255, value ^ 1} - {value}:
        assert not verify_at_key(base, digest, key, other_value, pi_i, pi_e, params)
    if value == 0:
        # every untouched key holds 0 as well
        return
    for other_key in (key + 1, key + 2):
        assert not verify_at_key(base, digest, other_key, value, pi_i, pi_e, params)


def test_verify_rejects_wrong_digest(params, committed):
    base, digest, product = committed
    pi_i, pi_e = open_at_key(base, product, 0, 4, params)
    other_digest, _ = commit(base, [0, 1], [4, 8], params)
    assert not verify_at_key(base, other_digest, 0, 4, pi_i, pi_e, params)


def test_open_wrong_value_raises(params, committed):
    base, _, product = committed
    with pytest.raises(EngineError):
        open_at_key(base, product, 1, 4, params)


def test_untouched_key_holds_zero(params, committed):
    """The vector is sparse: keys never committed read as 0."""
    base, digest, product = committed
    pi_i, pi_e = open_at_key(base, product, 5, 0, params)
    assert verify_at_key(base, digest, 5, 0, pi_i, pi_e, params)
    with pytest.raises(EngineError):
        open_at_key(base, product, 5, 1, params)


@pytest.mark.parametrize("key, value, pi_i, pi_e", [
    (-1, 7, 2, (1, 1)),
    (1, 256, 2, (1, 1)),
    (1, -3, 2, (1, 1)),
    (True, 7, 2, (1, 1)),
    ("1", 7, 2, (1, 1)),
    (1, 7, None, None),
    (1, 7, 2, "bad"),
])
def test_verify_never_raises(params, committed, key, value, pi_i, pi_e):
    base, digest, _ = committed
    assert verify_at_key(base, digest, key, value, pi_i, pi_e, params) is False


def test_get_key_value_elem(params):
    (key, value) = (0, 5)
    elem = get_key_value_elem(key, value)

    bv = to_binary(value)
    indices = list(range(8))
    (state, product) = binary.commit(2, bv, indices, params)

    assert state == pow(2, elem, params['N'])
    assert product == elem


class TestUpdate:
    """Update flips bits in both directions."""

    def test_commit_update_verify(self, params, committed):
        base, digest, product = committed

        new_digest = update(base, digest, product, [1], [9], params)
        new_product = update_product(product, [1], [9])

        pi_i, pi_e = open_at_key(base, new_product, 1, 9, params)
        assert verify_at_key(base, new_digest, 1, 9, pi_i, pi_e, params)
        assert not verify_at_key(base, new_digest, 1, 7, pi_i, pi_e, params)

        # Witnesses for the old value no longer verify
        old_pi_i, old_pi_e = open_at_key(base, product, 1, 7, params)
        assert not verify_at_key(base, new_digest, 1, 7, old_pi_i, old_pi_e, params)

        # Other keys are unaffected
        pi_i, pi_e = open_at_key(base, new_product, 0, 4, params)
        assert verify_at_key(base, new_digest, 0, 4, pi_i, pi_e, params)

    def test_update_matches_fresh_commit(self, params, committed):
        base, digest, product = committed

        new_digest = update(base, digest, product, [0, 1], [0, 255], params)
        new_product = update_product(product, [0, 1], [0, 255])

        assert (new_digest, new_product) == commit(base, [0, 1], [0, 255], params)

    def test_update_new_key(self, params, committed):
        base, digest, product = committed

        new_digest = update(base, digest, product, [2], [3], params)
        new_product = update_product(product, [2], [3])

        assert (new_digest, new_product) == commit(base, [0, 1, 2], [4, 7, 3], params)

    def test_update_same_value_is_noop(self, params, committed):
        base, digest, product = committed
        assert update(base, digest, product, [1], [7], params) == digest
        assert update_product(product, [1], [7]) == product

    def test_update_invalid_input(self, params, committed):
        base, digest, product = committed
        with pytest.raises(InvalidInput):
            update(base, digest, product, [1, 2], [9], params)

    def test_sequential_updates(self, params):
        base = params['g']
        digest, product = commit(base, [0], [1], params)
        for value in (2, 3, 0, 200):
            digest = update(base, digest, product, [0], [value], params)
            product = update_product(product, [0], [value])
            pi_i, pi_e = open_at_key(base, product, 0, value, params)
            assert verify_at_key(base, digest, 0, value, pi_i, pi_e, params)


def test_default_params(params, monkeypatch):
    """Operations without explicit params use the configured modulus."""
    monkeypatch.setattr(config, 'modulus', params['N'])
    clear_default_params()
    try:
        assert default_params()['N'] == params['N']

        digest, product = commit(2, [0], [6])
        assert (digest, product) == commit(2, [0], [6], params)
        pi_i, pi_e = open_at_key(2, product, 0, 6)
        assert verify_at_key(2, digest, 0, 6, pi_i, pi_e)
    finally:
        clear_default_params()


# ============================================================================
# Default parameters and concurrency
# ============================================================================

@pytest.fixture
def fresh_defaults():
    """Start and end with no cached default parameters."""
    clear_default_params()
    yield
    clear_default_params()


def test_default_modulus_is_rsa2048(fresh_defaults):
    params = default_params()
    assert params['N'] == int(RSA2048_MODULUS)
    assert params['modulus_bits'] == 2048
    assert params['g'] == 2


def test_default_params_returns_copy(fresh_defaults):
    params = default_params()
    params['N'] = 15
    params['g'] = 7
    again = default_params()
    assert again['N'] == int(RSA2048_MODULUS)
    assert again['g'] == 2


def test_digest_verifies_after_rebuilding_defaults(fresh_defaults):
    """Another process with its own setup verifies the same digests."""
    digest, product = commit(2, [0, 1], [4, 7])
    pi_i, pi_e = open_at_key(2, product, 1, 7)

    clear_default_params()

    assert verify_at_key(2, digest, 1, 7, pi_i, pi_e)
    assert not verify_at_key(2, digest, 1, 4, pi_i, pi_e)


def test_concurrent_operations_with_default_params(fresh_defaults):
    """Commit, open and verify from many threads without coordination."""
    def lifecycle(key):
        value = (key * 37) % 256
        digest, product = commit(2, [key, key + 100], [value, 255 - value])
        pi_i, pi_e = open_at_key(2, product, key, value)
        return (verify_at_key(2, digest, key, value, pi_i, pi_e),
                verify_at_key(2, digest, key, value ^ 1, pi_i, pi_e))

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lifecycle, range(16)))

    assert all(ok for ok, _ in results)
    assert not any(forged for _, forged in results)


def test_concurrent_first_setup_runs_once(fresh_defaults, monkeypatch):
    """Racing first calls share a single generated modulus."""
    primes = [1000003, 1000033, 1000037, 1000039, 1000081, 1000099]
    calls = []
    calls_lock = threading.Lock()

    class SlowRSAGroup:
        def paramgen(self, secparam):
            with calls_lock:
                calls.append(secparam)
            time.sleep(0.2)
            p, q = random.sample(primes, 2)
            return p, q, p * q

    monkeypatch.setattr(groups, 'RSAGroup', SlowRSAGroup)
    monkeypatch.setattr(config, 'modulus', None)

    barrier = threading.Barrier(8)

    def first_call(_):
        barrier.wait()
        return default_params()['N']

    with ThreadPoolExecutor(max_workers=8) as pool:
        moduli = set(pool.map(first_call, range(8)))

    assert len(moduli) == 1
    assert len(calls) == 1
