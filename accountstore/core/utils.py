"""
Utility functions for AccountStore.

This module provides hashing helpers used to derive component roots, and
log sanitization for values read back from storage.
"""

import hashlib
import json
from typing import Any

from accountstore.core.crypto import Digest

# Characters that can be used for log injection
LOG_INJECTION_CHARS = {
    "\n": "\\n",
    "\r": "\\r",
    "\x00": "\\x00",
    "\x1b": "\\x1b",  # ANSI escape
    "\t": "\\t",
}

# Domain separation between leaf and inner node hashes
LEAF_PREFIX = b"\x00"
NODE_PREFIX = b"\x01"


def generate_hash(data: str | bytes | dict[str, Any]) -> Digest:
    """
    Generate SHA-256 digest for given data.

    Args:
        data: Data to hash (string, bytes or dictionary)

    Returns:
        SHA-256 digest
    """
    if isinstance(data, dict):
        # Sorted keys so equal dicts hash identically
        data = json.dumps(data, sort_keys=True, separators=(',', ':'))
    if isinstance(data, str):
        data = data.encode()
    return Digest(hashlib.sha256(data).digest())


def sanitize_for_log(value: Any) -> str:
    """
    Sanitize a value before logging to prevent log injection.

    Args:
        value: Value to sanitize

    Returns:
        Safe string representation
    """
    if value is None:
        return "null"

    if isinstance(value, (int, float, bool)):
        return str(value)

    if isinstance(value, bytes):
        value = value.hex()

    result = str(value)
    for char, replacement in LOG_INJECTION_CHARS.items():
        result = result.replace(char, replacement)
    if len(result) > 200:
        result = result[:200] + "...[truncated]"
    return result


class MerkleTree:
    """
    Binary Merkle tree over digests.

    Leaves are hashed as H(0x00 || leaf) and inner nodes as
    H(0x01 || left || right), so a leaf can never be confused with an inner
    node. An unpaired node at the end of a level is promoted unchanged.
    """

    def __init__(self, data_list: list[str | bytes | dict[str, Any]] = None, leaves: list[Digest] = None):
        """
        Initialize Merkle Tree.

        Args:
            data_list: Data items to include in the tree (will be hashed)
            leaves: Pre-computed leaf digests. If provided, data_list is ignored.
        """
        if leaves is not None:
            self.leaves = list(leaves)
        elif data_list is not None:
            self.leaves = [generate_hash(data) for data in data_list]
        else:
            self.leaves = []

        self.root = self._build_tree([self.hash_leaf(leaf) for leaf in self.leaves])

    @staticmethod
    def hash_leaf(leaf: Digest) -> Digest:
        """Hash a leaf digest into the tree."""
        return generate_hash(LEAF_PREFIX + leaf.value)

    @staticmethod
    def hash_node(left: Digest, right: Digest) -> Digest:
        """Hash two child digests into their parent."""
        return generate_hash(NODE_PREFIX + left.value + right.value)

    def _build_tree(self, nodes: list[Digest]) -> Digest:
        """
        Recursively build the Merkle Tree.

        Args:
            nodes: Digests at the current level

        Returns:
            Root digest of the tree
        """
        if not nodes:
            return generate_hash(b"")  # Empty tree hash

        if len(nodes) == 1:
            return nodes[0]

        new_level = []
        for i in range(0, len(nodes), 2):
            if i + 1 < len(nodes):
                new_level.append(self.hash_node(nodes[i], nodes[i + 1]))
            else:
                # Odd node out moves up a level as is
                new_level.append(nodes[i])

        return self._build_tree(new_level)

    def get_root(self) -> Digest:
        """Get the Merkle Root digest."""
        return self.root
