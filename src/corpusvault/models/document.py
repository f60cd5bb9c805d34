# src/corpusvault/models/document.py
"""Upload and ingestion request models."""

from pydantic import BaseModel, ConfigDict


class Document(BaseModel):
    """A raw upload as received from a contributor."""

    model_config = ConfigDict(frozen=True)

    data: bytes
    media_type: str
    file_name: str

    @property
    def size(self) -> int:
        return len(self.data)


class IngestionRequest(BaseModel):
    """Everything the ingestion pipeline needs to process one upload."""

    model_config = ConfigDict(frozen=True)

    corpus_id: str
    document: Document
    contributor: str | None = None
