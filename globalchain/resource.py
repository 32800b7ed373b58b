"""Wallet resources: outputs owned by the wallet and whether they are spent."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .hashing import Hash


class ResourceInfo(IntEnum):
    """The spending state of a resource."""

    UNSPENT = 1
    SPENT = 2


@dataclass
class Resource:
    """Output ``index`` of transaction ``hash`` worth ``value``, owned by key ``key_index``."""

    hash: Hash
    index: int
    value: int
    key_index: int
    available: bool = True
    info: ResourceInfo = ResourceInfo.UNSPENT

    def mark_spent(self) -> None:
        """Record that the resource has been spent."""
        self.info = ResourceInfo.SPENT

    @property
    def is_unspent(self) -> bool:
        """Tell whether the resource is still unspent."""
        return self.info is ResourceInfo.UNSPENT


def new_unspent_resource(hash_value: Hash, index: int, value: int, key_index: int) -> Resource:
    """Create an available, unspent resource."""
    return Resource(hash_value, index, value, key_index)