"""
Vector Commitment Serialization
Serialize/deserialize digests, products and witnesses for HTTP/JSON transport
"""

import base64
import json
import operator
from typing import Dict, Tuple

from vc_errors import InvalidInput


def serialize_int(x: int) -> str:
    """Serialize a (possibly negative) integer as base64 of its signed big-endian bytes"""
    length = (x.bit_length() + 8) // 8
    return base64.b64encode(x.to_bytes(length, 'big', signed=True)).decode('utf-8')


def deserialize_int(data: str) -> int:
    """Deserialize an integer produced by serialize_int"""
    try:
        raw = base64.b64decode(data, validate=True)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"Malformed integer encoding: {data!r}") from e
    if not raw:
        raise InvalidInput("Empty integer encoding")
    return int.from_bytes(raw, 'big', signed=True)


def serialize_witnesses(pi_i: int, pi_e: Tuple[int, int]) -> Dict:
    """Serialize a witness pair from open_at_key"""
    (d, b) = pi_e
    return {
        'pi_i': serialize_int(pi_i),
        'pi_e': {
            'd': serialize_int(d),
            'b': serialize_int(b),
        },
    }


def deserialize_witnesses(data: Dict) -> Tuple[int, Tuple[int, int]]:
    """Deserialize a witness pair"""
    try:
        pi_i = deserialize_int(data['pi_i'])
        d = deserialize_int(data['pi_e']['d'])
        b = deserialize_int(data['pi_e']['b'])
    except (KeyError, TypeError) as e:
        raise InvalidInput(f"Malformed witness structure: {e}") from e
    return pi_i, (d, b)


def serialize_commitment(digest: int, product: int = None) -> Dict:
    """Serialize a digest and, for the committer's own records, its product"""
    result = {'digest': serialize_int(digest)}
    if product is not None:
        result['product'] = serialize_int(product)
    return result


def deserialize_commitment(data: Dict) -> Tuple[int, int]:
    """Deserialize a commitment; product is None when absent"""
    try:
        digest = deserialize_int(data['digest'])
    except (KeyError, TypeError) as e:
        raise InvalidInput(f"Malformed commitment structure: {e}") from e
    product = deserialize_int(data['product']) if 'product' in data else None
    return digest, product


def serialize_params(params: dict) -> Dict:
    """Serialize the public group parameters (modulus and base)"""
    return {
        'N': serialize_int(params['N']),
        'g': params['g'],
    }


def deserialize_params(data: Dict) -> dict:
    """Deserialize group parameters"""
    try:
        N = deserialize_int(data['N'])
        g = operator.index(data['g'])
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidInput(f"Malformed params structure: {e}") from e
    return {
        'N': N,
        'g': g,
        'secparam': None,
        'modulus_bits': N.bit_length(),
    }


def to_json(data: Dict) -> str:
    return json.dumps(data, sort_keys=True)


def from_json(data: str) -> Dict:
    try:
        return json.loads(data)
    except json.JSONDecodeError as e:
        raise InvalidInput(f"Malformed JSON: {e}") from e
