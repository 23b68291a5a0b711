"""Tests for the advisor pipeline."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import pytest

from idle_advisor import Advisor
from idle_advisor.config.loader import AdvisorConfig, RankingConfig
from idle_advisor.models.candidates import Candidate, CandidateKind
from idle_advisor.models.results import FailureKind
from idle_advisor.strategy.ranking import GreedyRankingPolicy, RelaxedRankingPolicy


def _snapshot(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "currency": 200.0,
        "rate": 10.0,
        "buildings": [
            {"name": "Cursor", "owned": 0, "cost": 15, "unit_rate": 0.1, "total_rate": 0},
            {"name": "Grandma", "owned": 5, "cost": 1000, "unit_rate": 1, "total_rate": 6},
            {"name": "Farm", "owned": 0, "cost": 1100, "unit_rate": 8},
        ],
        "upgrades": [
            {"name": "Forwards from grandma", "cost": 9000, "desc": "Grandmas are 2x as efficient"},
            {"name": "Lucky day", "cost": 1000, "desc": "???"},
        ],
    }
    data.update(overrides)
    return data


def _slow_snapshot() -> dict[str, Any]:
    """Every purchase takes longer than an hour to pay back."""
    return {
        "currency": 0,
        "rate": 0.01,
        "buildings": [{"name": "Portal", "owned": 0, "cost": 1_000_000, "unit_rate": 10}],
        "upgrades": [],
    }


class _ExplodingPolicy:
    name = "exploding"

    def rank(self, candidates: Iterable[Candidate]) -> list[Candidate]:
        raise RuntimeError("kaboom")


class TestAnalyze:
    """Successful analysis."""

    def test_recommends_fastest_payback(self) -> None:
        result = Advisor().analyze(_snapshot())

        assert result.success
        assert result.failure is None
        rec = result.recommendation
        assert rec is not None
        # Farm 137.5s, Cursor 150s, Grandma 833s, 2x upgrade 1500s, Lucky day 5000s
        assert rec.top.name == "Farm"
        assert [c.name for c in rec.alternatives] == ["Cursor", "Grandma", "Forwards from grandma"]
        assert rec.policy_name == "greedy"
        assert rec.state.currency == 200.0

    def test_alternatives_are_bounded(self) -> None:
        config = AdvisorConfig(ranking=RankingConfig(alternatives_count=1))
        result = Advisor(config).analyze(_snapshot())

        assert result.recommendation is not None
        assert len(result.recommendation.alternatives) == 1

    def test_caches_last_recommendation(self) -> None:
        advisor = Advisor()
        assert advisor.last_recommendation is None

        result = advisor.analyze(_snapshot())

        assert advisor.last_recommendation == result.recommendation

    def test_idempotent(self) -> None:
        advisor = Advisor()
        first = advisor.analyze(_snapshot())
        second = advisor.analyze(_snapshot())

        assert first.recommendation is not None and second.recommendation is not None
        assert first.recommendation.ranked == second.recommendation.ranked

    def test_skipped_items_become_warnings(self) -> None:
        raw = _snapshot()
        raw["buildings"].append({"name": "Broken", "owned": -1, "cost": 5, "unit_rate": 1})

        result = Advisor().analyze(raw)

        assert result.success
        assert any("Broken" in warning for warning in result.warnings)

    def test_accepts_cookie_clicker_field_names(self) -> None:
        raw = {
            "cookies": 50,
            "cookiesPs": 0,
            "Objects": {"Cursor": {"name": "Cursor", "amount": 0, "price": 15, "cps": 0.1}},
            "UpgradesInStore": [],
        }
        result = Advisor().analyze(raw)

        assert result.recommendation is not None
        assert result.recommendation.top.display_name == "Cursor (#1)"


class TestAnalyzeFailures:
    """Typed failures instead of exceptions."""

    @pytest.mark.parametrize("raw", [None, {}, {"currency": 1, "rate": 1}, "snapshot"])
    def test_invalid_source(self, raw: Any) -> None:
        result = Advisor().analyze(raw)

        assert not result.success
        assert result.failure is not None
        assert result.failure.kind == FailureKind.INVALID_SOURCE

    def test_no_items(self) -> None:
        result = Advisor().analyze(_snapshot(buildings=[], upgrades=[]))

        assert result.failure is not None
        assert result.failure.kind == FailureKind.NO_CANDIDATES

    def test_only_free_items(self) -> None:
        raw = _snapshot(
            buildings=[{"name": "Freebie", "owned": 0, "cost": 0, "unit_rate": 1}],
            upgrades=[],
        )
        result = Advisor().analyze(raw)

        assert result.failure is not None
        assert result.failure.kind == FailureKind.NO_CANDIDATES

    def test_all_above_ceiling(self) -> None:
        """Greedy finds nothing; relaxed ranking still does."""
        advisor = Advisor()

        greedy = advisor.analyze(_slow_snapshot())
        relaxed = advisor.show_all(_slow_snapshot())

        assert greedy.failure is not None
        assert greedy.failure.kind == FailureKind.NO_CANDIDATES
        assert "show-all" in greedy.failure.message
        assert relaxed.success
        assert relaxed.recommendation is not None
        assert relaxed.recommendation.top.name == "Portal"
        assert relaxed.recommendation.policy_name == "relaxed"

    def test_show_all_does_not_change_selected_policy(self) -> None:
        advisor = Advisor()
        advisor.show_all(_slow_snapshot())
        assert advisor.ranking_policy_name == "greedy"

    def test_failed_policy_falls_back_with_warning(self) -> None:
        advisor = Advisor(policy=_ExplodingPolicy())

        result = advisor.analyze(_snapshot())

        assert result.success
        assert result.recommendation is not None
        assert result.recommendation.policy_name == "greedy"
        assert any("exploding" in warning for warning in result.warnings)

    def test_policy_failure(self) -> None:
        class BrokenGreedy(GreedyRankingPolicy):
            def rank(self, candidates: Iterable[Candidate]) -> list[Candidate]:
                raise RuntimeError("broken")

        result = Advisor(policy=BrokenGreedy()).analyze(_snapshot())

        assert result.failure is not None
        assert result.failure.kind == FailureKind.POLICY_FAILURE

    def test_failure_keeps_previous_recommendation(self) -> None:
        advisor = Advisor()
        advisor.analyze(_snapshot())
        advisor.analyze(None)
        assert advisor.last_recommendation is not None


class TestPolicySelection:
    """Selected policy is instance state."""

    def test_default_policy_name(self) -> None:
        advisor = Advisor()
        assert advisor.ranking_policy_name == "greedy"
        assert advisor.get_ranking_policy_name() == "greedy"

    def test_policy_from_config(self) -> None:
        config = AdvisorConfig(ranking=RankingConfig(policy="relaxed"))
        assert Advisor(config).ranking_policy_name == "relaxed"

    def test_set_ranking_policy(self) -> None:
        advisor = Advisor()
        advisor.set_ranking_policy(RelaxedRankingPolicy())

        result = advisor.analyze(_slow_snapshot())

        assert result.success
        assert advisor.get_ranking_policy_name() == "relaxed"

    def test_set_ranking_policy_rejects_non_policy(self) -> None:
        with pytest.raises(TypeError):
            Advisor().set_ranking_policy(object())  # type: ignore[arg-type]

    def test_instances_are_independent(self) -> None:
        first = Advisor()
        second = Advisor()
        first.set_ranking_policy(RelaxedRankingPolicy())
        assert second.ranking_policy_name == "greedy"


class TestCandidateQueries:
    """Unranked listing, ranked listing and diagnostics."""

    def test_list_candidates_is_unranked(self) -> None:
        candidates = Advisor().list_candidates(_snapshot())
        assert [c.name for c in candidates] == [
            "Cursor",
            "Grandma",
            "Farm",
            "Forwards from grandma",
            "Lucky day",
        ]

    def test_list_candidates_invalid_source(self) -> None:
        assert Advisor().list_candidates({"currency": 1}) == []

    def test_candidates_for_normalized_state(self) -> None:
        advisor = Advisor()
        state = advisor.normalize(_snapshot())
        assert advisor.candidates_for(state) == advisor.list_candidates(_snapshot())

    def test_recommend_limits_ranked_list(self) -> None:
        advisor = Advisor(policy=RelaxedRankingPolicy())
        ranked = advisor.recommend(_snapshot(), limit=2)
        assert [c.name for c in ranked] == ["Farm", "Cursor"]

    def test_recommend_invalid_source(self) -> None:
        assert Advisor().recommend(None) == []

    def test_diagnostics(self) -> None:
        info = Advisor().diagnostics(_snapshot())

        assert info["valid_source"] is True
        assert info["buildings"] == 3
        assert info["upgrades"] == 2
        assert info["building_candidates"] == 3
        assert info["upgrade_candidates"] == 2
        assert info["viable_candidates"] == 4
        assert info["policy"] == "greedy"

    def test_diagnostics_invalid_source(self) -> None:
        info = Advisor().diagnostics({})
        assert info["valid_source"] is False
        assert "error" in info

    def test_candidate_kinds(self) -> None:
        kinds = {c.kind for c in Advisor().list_candidates(_snapshot())}
        assert kinds == {CandidateKind.BUILDING, CandidateKind.UPGRADE}
