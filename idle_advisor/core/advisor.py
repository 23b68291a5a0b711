"""Advisor: the public entry point of the ROI pipeline.

Usage:
    >>> advisor = Advisor()
    >>> result = advisor.analyze(snapshot)
    >>> if result.success:
    ...     print(result.recommendation.top.display_name)
    ... else:
    ...     print(result.failure.kind, result.failure.message)

Each call runs snapshot -> StateNormalizer -> EconomicModel -> RankingEngine.
The only state kept between calls is the selected ranking policy and the last
recommendation, which is cached for display only.
"""

from __future__ import annotations

import logging
from typing import Any

from idle_advisor.config.loader import AdvisorConfig, get_default_config
from idle_advisor.core.economics import EconomicModel, candidates_by_kind, viable_candidates
from idle_advisor.core.normalizer import StateNormalizer
from idle_advisor.interfaces.errors import InvalidSnapshotError, PolicyFailureError
from idle_advisor.interfaces.ranking import RankingPolicy
from idle_advisor.models.candidates import Candidate, CandidateKind
from idle_advisor.models.results import AnalysisResult, FailureKind, Recommendation
from idle_advisor.models.state import NormalizedState
from idle_advisor.strategy.engine import RankingEngine, policy_name
from idle_advisor.strategy.ranking import RelaxedRankingPolicy, resolve_policy

logger = logging.getLogger(__name__)


class Advisor:
    """Analyzes snapshots and recommends the purchase that pays back fastest."""

    def __init__(
        self,
        config: AdvisorConfig | None = None,
        policy: RankingPolicy | None = None,
    ) -> None:
        """Initialize the advisor.

        Args:
            config: Advisor configuration. Defaults to built-in settings.
            policy: Initial ranking policy. Defaults to the policy named in config.
        """
        self._config = config or get_default_config()
        ranking = self._config.ranking
        self._normalizer = StateNormalizer(self._config.snapshot)
        self._model = EconomicModel(self._config.estimation)
        self._engine = RankingEngine(
            policy or resolve_policy(ranking.policy, ranking.max_payback_time),
            fallback_max_payback_time=ranking.max_payback_time,
        )
        self._last_recommendation: Recommendation | None = None

    @property
    def config(self) -> AdvisorConfig:
        return self._config

    @property
    def ranking_policy_name(self) -> str:
        """Name of the active ranking policy."""
        return self._engine.policy_name

    @property
    def last_recommendation(self) -> Recommendation | None:
        """Most recent successful recommendation, if any."""
        return self._last_recommendation

    def get_ranking_policy_name(self) -> str:
        return self.ranking_policy_name

    def set_ranking_policy(self, policy: RankingPolicy) -> None:
        """Swap the active ranking policy.

        Raises:
            TypeError: If ``policy`` does not provide ``name`` and ``rank``.
        """
        self._engine.set_policy(policy)

    def normalize(self, raw: Any) -> NormalizedState:
        """Normalize a snapshot.

        Raises:
            InvalidSnapshotError: If the snapshot lacks a required field.
        """
        return self._normalizer.normalize(raw)

    def analyze(self, raw: Any, policy: RankingPolicy | None = None) -> AnalysisResult:
        """Run the full pipeline on a snapshot.

        Args:
            raw: Snapshot from the state provider.
            policy: Policy for this call only. Defaults to the active policy.

        Returns:
            A result holding either a recommendation or a typed failure.
        """
        try:
            state = self._normalizer.normalize(raw)
        except InvalidSnapshotError as exc:
            logger.error("Snapshot rejected: %s", exc)
            return AnalysisResult.failed(FailureKind.INVALID_SOURCE, str(exc))

        warnings = list(state.skipped)
        if state.is_empty:
            return AnalysisResult.failed(
                FailureKind.NO_CANDIDATES,
                "Snapshot contains no admissible buildings or upgrades",
                tuple(warnings),
            )

        candidates = self._model.compute_candidates(state)
        if not candidates:
            return AnalysisResult.failed(
                FailureKind.NO_CANDIDATES,
                "No purchase candidates could be computed; everything may be free or locked",
                tuple(warnings),
            )

        active = policy or self._engine.policy
        try:
            ranked = self._engine.rank(candidates, active)
        except PolicyFailureError as exc:
            logger.error("Ranking failed: %s", exc)
            return AnalysisResult.failed(FailureKind.POLICY_FAILURE, str(exc), tuple(warnings))
        warnings.extend(self._engine.last_warnings)

        if not ranked:
            return AnalysisResult.failed(
                FailureKind.NO_CANDIDATES,
                self._empty_ranking_message(active),
                tuple(warnings),
            )

        count = self._config.ranking.alternatives_count
        recommendation = Recommendation(
            top=ranked[0],
            alternatives=ranked[1 : count + 1],
            state=state,
            policy_name=self._engine.last_policy_name,
        )
        self._last_recommendation = recommendation
        logger.info(
            "Best purchase: %s (payback %.1fs, %d candidates ranked)",
            recommendation.top.display_name,
            recommendation.top.payback_time,
            len(ranked),
        )
        return AnalysisResult.ok(recommendation, tuple(warnings))

    def show_all(self, raw: Any) -> AnalysisResult:
        """Analyze without the payback ceiling, for when greedy finds nothing."""
        return self.analyze(raw, policy=RelaxedRankingPolicy())

    def list_candidates(self, raw: Any) -> list[Candidate]:
        """Unranked candidates for inspection; empty when the snapshot is invalid."""
        try:
            state = self._normalizer.normalize(raw)
        except InvalidSnapshotError as exc:
            logger.warning("Cannot list candidates: %s", exc)
            return []
        return self.candidates_for(state)

    def candidates_for(self, state: NormalizedState) -> list[Candidate]:
        """Unranked candidates for an already normalized state."""
        return self._model.compute_candidates(state)

    def recommend(self, raw: Any, limit: int = 10) -> list[Candidate]:
        """Ranked candidates, best first; empty when analysis fails."""
        try:
            state = self._normalizer.normalize(raw)
        except InvalidSnapshotError as exc:
            logger.warning("Cannot rank candidates: %s", exc)
            return []
        try:
            return self._engine.top(self._model.compute_candidates(state), limit)
        except PolicyFailureError as exc:
            logger.error("Ranking failed: %s", exc)
            return []

    def diagnostics(self, raw: Any) -> dict[str, Any]:
        """Counts describing what the pipeline sees in a snapshot."""
        info: dict[str, Any] = {"policy": self.ranking_policy_name, "valid_source": False}
        try:
            state = self._normalizer.normalize(raw)
        except InvalidSnapshotError as exc:
            info["error"] = str(exc)
            return info

        candidates = self._model.compute_candidates(state)
        info.update(
            {
                "valid_source": True,
                "currency": state.currency,
                "rate": state.rate,
                "buildings": len(state.buildings),
                "upgrades": len(state.upgrades),
                "skipped": len(state.skipped),
                "candidates": len(candidates),
                "building_candidates": len(candidates_by_kind(candidates, CandidateKind.BUILDING)),
                "upgrade_candidates": len(candidates_by_kind(candidates, CandidateKind.UPGRADE)),
                "viable_candidates": len(
                    viable_candidates(candidates, self._config.ranking.max_payback_time)
                ),
            }
        )
        return info

    @staticmethod
    def _empty_ranking_message(policy: RankingPolicy) -> str:
        ceiling = getattr(policy, "max_payback_time", None)
        if ceiling is not None:
            return (
                f"No candidate pays back within {ceiling:g}s under the "
                f"{policy_name(policy)} policy; try the relaxed policy (show-all)"
            )
        return f"No candidate has a finite payback time under the {policy_name(policy)} policy"
