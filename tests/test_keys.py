"""Tests for lookup key generation."""

from __future__ import annotations

from hashlib import md5

from txnative.keys import explode_context, generate_key


def test_generate_key_is_stable():
    assert generate_key("Hello") == generate_key("Hello")
    assert generate_key("Hello") == md5(b"Hello:").hexdigest()


def test_generate_key_differs_per_source():
    assert generate_key("Hello") != generate_key("hello")


def test_generate_key_with_context():
    assert generate_key("Close", "door") == md5(b"Close:door").hexdigest()
    assert generate_key("Close", "door, verb") == md5(b"Close:door:verb").hexdigest()
    assert generate_key("Close", ["door", "verb"]) == generate_key("Close", "door,verb")
    assert generate_key("Close", "door") != generate_key("Close")


def test_explode_context_drops_blank_items():
    assert explode_context(None) == []
    assert explode_context("") == []
    assert explode_context(" a , ,b ") == ["a", "b"]
