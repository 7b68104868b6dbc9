"""Rewrite content-addressed ``ipfs://`` pointers into gateway URLs."""

from __future__ import annotations

import re

IPFS_SCHEME = "ipfs://"

_IPFS_PATH_POINTER = re.compile(r"^ipfs://ipfs/")
_IPFS_POINTER = re.compile(r"^ipfs://")


def gateway_root(gateway_base: str) -> str:
    """Return ``gateway_base`` with exactly one trailing slash."""

    return gateway_base.rstrip("/") + "/"


def normalize_pointer(pointer: str, *, gateway_base: str) -> str:
    """Map ``pointer`` onto a resolvable address.

    ``ipfs://ipfs/<cid>`` keeps its ``ipfs/`` segment, bare ``ipfs://<cid>`` gains
    one. Anything else is assumed to be resolvable already and returned untouched.
    """

    candidate = pointer.strip()
    root = gateway_root(gateway_base)
    if _IPFS_PATH_POINTER.match(candidate):
        return root + candidate[len(IPFS_SCHEME) :]
    if _IPFS_POINTER.match(candidate):
        return f"{root}ipfs/{candidate[len(IPFS_SCHEME) :]}"
    return pointer
