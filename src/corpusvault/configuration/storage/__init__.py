"""Storage configurations for corpusvault."""

from corpusvault.configuration.storage.ipfs import IPFSStorage
from corpusvault.configuration.storage.local import LocalStorage
from corpusvault.configuration.storage.memory import InMemoryStorage

__all__ = ["LocalStorage", "IPFSStorage", "InMemoryStorage"]
