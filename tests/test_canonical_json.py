"""Tests for canonical serialization used by schema hashing."""

import hashlib
import json

import pytest

from schemacraft._internal.canonical_json import canonical_dumps, sha256_digest


def test_canonical_dumps_sorted_compact():
    assert canonical_dumps({"b": 1, "a": {"z": 1, "y": [3, 2]}}) == '{"a":{"y":[3,2],"z":1},"b":1}'


def test_canonical_dumps_keeps_unicode():
    assert canonical_dumps({"name": "café"}) == '{"name":"café"}'


def test_canonical_dumps_rejects_nan():
    with pytest.raises(ValueError):
        canonical_dumps({"x": float("nan")})


def test_sha256_digest_matches_canonical_text():
    payload = {"b": 2, "a": [1, 2]}
    canonical_str = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    expected = hashlib.sha256(canonical_str.encode("utf-8")).hexdigest()
    assert sha256_digest(payload) == f"sha256:{expected}"


def test_digest_key_order_independent():
    assert sha256_digest({"a": 1, "b": 2}) == sha256_digest({"b": 2, "a": 1})
