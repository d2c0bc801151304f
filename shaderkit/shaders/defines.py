# shaderkit/shaders/defines.py
from __future__ import annotations

import hashlib

from shaderkit.types import DefinesHash


def canonicalize_defines(defines: str) -> str:
    """
    Normalize spacing in a define string.

    Leading and trailing spaces are dropped and interior runs of spaces
    become one. Token order and case are kept, so "A B" and "B A" stay
    different keys.
    """
    return " ".join(token for token in defines.split(" ") if token)


def defines_hash(canonical: str) -> DefinesHash:
    return DefinesHash(
        int(hashlib.sha256(canonical.encode()).hexdigest(), 16) % (10**16)
    )


def split_define(token: str) -> tuple[str, str]:
    """Split a "NAME=VALUE" token. Bare names get an empty value."""
    name, _, value = token.partition("=")
    return name, value
