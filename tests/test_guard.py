# tests/test_guard.py
"""Tests for the relevance guard."""

import math

import pytest

from corpusvault.exceptions import RelevanceRejection
from corpusvault.guard import RelevanceGuard, evenly_strided
from corpusvault.similarity import cosine_similarity


@pytest.fixture
def guard():
    return RelevanceGuard()


class TestEvenlyStrided:
    def test_returns_all_when_fewer_than_count(self):
        assert evenly_strided([1, 2, 3], 10) == [1, 2, 3]

    def test_spreads_across_items(self):
        assert evenly_strided(list(range(100)), 10) == [0, 10, 20, 30, 40, 50, 60, 70, 80, 90]

    def test_keeps_order(self):
        picked = evenly_strided(list(range(37)), 7)
        assert picked == sorted(picked)
        assert len(picked) == 7

    def test_zero_count(self):
        assert evenly_strided([1, 2, 3], 0) == []


class TestRelevanceGuardConfig:
    def test_defaults(self, guard):
        assert guard.threshold == 0.15
        assert guard.sample_size == 10
        assert guard.max_comparisons == 100
        assert guard.on_error == "accept"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"threshold": 1.5},
            {"sample_size": 0},
            {"max_comparisons": 0},
            {"on_error": "ignore"},
        ],
    )
    def test_invalid_config(self, kwargs):
        with pytest.raises(ValueError):
            RelevanceGuard(**kwargs)


class TestRelevanceGuardEvaluate:
    def test_cold_start_accepts(self, guard, make_record):
        decision = guard.evaluate([make_record([1.0, 0.0])], [])

        assert decision.accepted is True
        assert decision.cold_start is True
        assert decision.average_similarity == 1.0
        assert decision.comparisons == 0

    def test_similar_content_accepted(self, guard, make_record):
        existing = [make_record([1.0, 0.0]), make_record([0.9, 0.1])]
        new = [make_record([1.0, 0.05])]

        decision = guard.evaluate(new, existing)

        assert decision.accepted is True
        assert decision.average_similarity > 0.9
        assert decision.comparisons == 2

    def test_low_similarity_rejected(self, guard, make_record):
        existing = [make_record([1.0, 0.0])]
        new = [make_record([0.04, math.sqrt(1 - 0.04**2)])]

        decision = guard.evaluate(new, existing)

        assert decision.accepted is False
        assert decision.average_similarity == pytest.approx(0.04)
        assert decision.threshold == 0.15

    def test_threshold_is_inclusive(self, make_record):
        guard = RelevanceGuard(threshold=cosine_similarity([1.0, 0.0], [1.0, 1.0]))
        existing = [make_record([1.0, 0.0])]
        new = [make_record([1.0, 1.0])]

        assert guard.evaluate(new, existing).accepted is True

    def test_empty_new_records_raises(self, guard, make_record):
        with pytest.raises(ValueError):
            guard.evaluate([], [make_record([1.0])])

    def test_sample_caps_existing_records(self, guard, make_record):
        existing = [make_record([1.0, 0.0]) for _ in range(50)]
        new = [make_record([1.0, 0.0]) for _ in range(3)]

        decision = guard.evaluate(new, existing)

        # 10 sampled existing records x 3 new records
        assert decision.comparisons == 30

    def test_comparison_budget(self, guard, make_record):
        existing = [make_record([1.0, 0.0]) for _ in range(50)]
        new = [make_record([1.0, 0.0]) for _ in range(40)]

        decision = guard.evaluate(new, existing)

        assert decision.comparisons == 100

    def test_budget_spread_over_whole_contribution(self, make_record):
        guard = RelevanceGuard(sample_size=1, max_comparisons=2)
        existing = [make_record([1.0, 0.0])]
        # The first half of the upload is on-topic, the second half is not
        new = [make_record([1.0, 0.0]) for _ in range(5)] + [
            make_record([0.0, 1.0]) for _ in range(5)
        ]

        decision = guard.evaluate(new, existing)

        assert decision.comparisons == 2
        assert decision.average_similarity == pytest.approx(0.5)


class TestRelevanceGuardErrors:
    def test_error_accepts_by_default(self, guard, make_record):
        existing = [make_record([1.0, 0.0])]
        new = [make_record([1.0, 0.0, 0.0])]

        decision = guard.evaluate(new, existing)

        assert decision.accepted is True
        assert decision.average_similarity is None
        assert decision.error is not None

    def test_error_rejects_with_reject_policy(self, make_record):
        guard = RelevanceGuard(on_error="reject")
        existing = [make_record([1.0, 0.0])]
        new = [make_record([1.0, 0.0, 0.0])]

        decision = guard.evaluate(new, existing)

        assert decision.accepted is False
        assert decision.average_similarity is None

    def test_non_finite_vector_uses_policy(self, guard, make_record):
        existing = [make_record([1.0, 0.0])]
        new = [make_record([math.nan, 0.0])]

        assert guard.evaluate(new, existing).accepted is True


class TestRelevanceGuardEnforce:
    def test_enforce_returns_accepted_decision(self, guard, make_record):
        decision = guard.enforce([make_record([1.0, 0.0])], [make_record([1.0, 0.0])])
        assert decision.accepted is True

    def test_enforce_raises_on_rejection(self, guard, make_record):
        with pytest.raises(RelevanceRejection) as exc_info:
            guard.enforce([make_record([0.0, 1.0])], [make_record([1.0, 0.0])])

        assert exc_info.value.average_similarity == pytest.approx(0.0)
        assert exc_info.value.threshold == 0.15
        assert "not relevant" in str(exc_info.value)

    def test_enforce_raises_on_error_with_reject_policy(self, make_record):
        guard = RelevanceGuard(on_error="reject")

        with pytest.raises(RelevanceRejection) as exc_info:
            guard.enforce([make_record([1.0])], [make_record([1.0, 0.0])])

        assert exc_info.value.average_similarity is None
