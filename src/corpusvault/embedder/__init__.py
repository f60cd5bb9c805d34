# src/corpusvault/embedder/__init__.py
"""Embedding functionality for corpusvault."""

from corpusvault.embedder.base import Embedder
from corpusvault.embedder.client import ClientEmbedder

__all__ = ["Embedder", "ClientEmbedder"]
