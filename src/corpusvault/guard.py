# src/corpusvault/guard.py
"""Relevance guard that keeps off-topic contributions out of a corpus."""

from collections.abc import Sequence
from typing import Literal, TypeVar

from loguru import logger

from corpusvault.exceptions import RelevanceRejection
from corpusvault.models import RelevanceDecision, VectorRecord
from corpusvault.similarity import cosine_similarity

# What to do when the similarity computation itself fails:
#   - "accept": let the contribution in (availability first)
#   - "reject": turn it away (strictness first)
GuardErrorPolicy = Literal["accept", "reject"]

T = TypeVar("T")


def evenly_strided(items: Sequence[T], count: int) -> list[T]:
    """Pick up to ``count`` items spread evenly across ``items``, in order."""
    if count <= 0:
        return []
    if len(items) <= count:
        return list(items)
    return [items[(i * len(items)) // count] for i in range(count)]


class RelevanceGuard:
    """Accept or reject new vectors by their similarity to an existing corpus.

    An empty corpus accepts anything (cold start). Otherwise up to
    ``sample_size`` existing records are drawn evenly across the corpus and
    compared pairwise with the new records, using at most ``max_comparisons``
    comparisons. The contribution is accepted when the average similarity
    reaches ``threshold``.

    Example:
        guard = RelevanceGuard(threshold=0.15)
        decision = guard.enforce(new_records, existing_records)
    """

    def __init__(
        self,
        threshold: float = 0.15,
        sample_size: int = 10,
        max_comparisons: int = 100,
        on_error: GuardErrorPolicy = "accept",
    ) -> None:
        """Initialize the guard.

        Args:
            threshold: Minimum average cosine similarity to accept (-1.0 to 1.0)
            sample_size: Maximum existing records sampled per evaluation
            max_comparisons: Maximum pairwise similarity computations
            on_error: Policy applied when the similarity computation fails
        """
        if not -1.0 <= threshold <= 1.0:
            raise ValueError("Threshold must be between -1.0 and 1.0")
        if sample_size < 1:
            raise ValueError(f"sample_size must be at least 1, got {sample_size}")
        if max_comparisons < 1:
            raise ValueError(f"max_comparisons must be at least 1, got {max_comparisons}")
        if on_error not in ("accept", "reject"):
            raise ValueError(f"on_error must be 'accept' or 'reject', got {on_error!r}")
        self.threshold = threshold
        self.sample_size = sample_size
        self.max_comparisons = max_comparisons
        self.on_error = on_error

    def evaluate(
        self,
        new_records: Sequence[VectorRecord],
        existing_records: Sequence[VectorRecord],
    ) -> RelevanceDecision:
        """Decide whether ``new_records`` belong with ``existing_records``.

        Raises:
            ValueError: If new_records is empty
        """
        if not new_records:
            raise ValueError("Relevance evaluation requires at least one new record")

        if not existing_records:
            return RelevanceDecision(
                accepted=True,
                average_similarity=1.0,
                threshold=self.threshold,
                cold_start=True,
            )

        try:
            average, comparisons = self._average_similarity(new_records, existing_records)
        except (ValueError, TypeError, FloatingPointError) as e:
            accepted = self.on_error == "accept"
            logger.warning(
                f"Relevance check failed ({e}); policy '{self.on_error}' "
                f"{'accepts' if accepted else 'rejects'} the contribution"
            )
            return RelevanceDecision(
                accepted=accepted,
                average_similarity=None,
                threshold=self.threshold,
                error=str(e),
            )

        accepted = average >= self.threshold
        if not accepted:
            logger.info(
                f"Rejected contribution: average similarity {average:.3f} "
                f"< threshold {self.threshold:.2f} over {comparisons} comparisons"
            )
        return RelevanceDecision(
            accepted=accepted,
            average_similarity=average,
            threshold=self.threshold,
            comparisons=comparisons,
        )

    def enforce(
        self,
        new_records: Sequence[VectorRecord],
        existing_records: Sequence[VectorRecord],
    ) -> RelevanceDecision:
        """Like evaluate(), but raise RelevanceRejection instead of returning a rejection."""
        decision = self.evaluate(new_records, existing_records)
        if not decision.accepted:
            raise RelevanceRejection(decision.average_similarity, decision.threshold)
        return decision

    def _average_similarity(
        self,
        new_records: Sequence[VectorRecord],
        existing_records: Sequence[VectorRecord],
    ) -> tuple[float, int]:
        sample = evenly_strided(existing_records, self.sample_size)
        # Spread the comparison budget over the whole contribution
        new_sample = evenly_strided(new_records, max(1, self.max_comparisons // len(sample)))

        scores = [
            cosine_similarity(new.vector, existing.vector)
            for new in new_sample
            for existing in sample
        ][: self.max_comparisons]

        return sum(scores) / len(scores), len(scores)
