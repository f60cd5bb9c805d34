# src/corpusvault/exceptions.py
"""Exceptions raised by corpusvault components."""


class CorpusVaultError(Exception):
    """Base class for all corpusvault errors."""


class ValidationError(CorpusVaultError, ValueError):
    """Input has the wrong shape, size or type.

    Raised before any backend call is made.
    """


class ExtractionError(CorpusVaultError):
    """A document could not be turned into text."""


class BackendUnavailableError(CorpusVaultError):
    """The embedding or generation backend failed or is unreachable."""


class StorageError(CorpusVaultError):
    """A put or get against the content store failed."""


class CorruptSnapshotError(CorpusVaultError):
    """A stored snapshot could not be parsed or decrypted."""


class RelevanceRejection(CorpusVaultError):
    """A contribution was rejected as off-topic for its corpus.

    Attributes:
        average_similarity: Measured average similarity against the corpus sample,
            or None when the rejection came from a failed similarity computation.
        threshold: The acceptance threshold that was applied.
    """

    def __init__(self, average_similarity: float | None, threshold: float) -> None:
        if average_similarity is None:
            message = (
                f"Relevance check could not be completed and contributions are "
                f"rejected on error (threshold {threshold:.2f})"
            )
        else:
            message = (
                f"Content is not relevant to this corpus: average similarity "
                f"{average_similarity:.3f} is below threshold {threshold:.2f}"
            )
        super().__init__(message)
        self.average_similarity = average_similarity
        self.threshold = threshold
