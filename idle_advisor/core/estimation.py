"""Heuristic rate estimates for upgrades described only by free-form text.

Upgrade effects are not exposed in structured form, so the description is
matched against a fixed list of patterns, most specific first:

1. explicit multiplier ("Grandmas are 2x as efficient")
2. percentage boost ("+50% CpS"), to one building or the global rate
3. flat per-click bonus ("+1 cookie per click")
4. bare building reference ("Grandmas learn to knit")
5. click-related keywords
6. unknown: a small share of the global rate

The first rule that applies wins. The factors come from :class:`EstimationConfig`
and are rough estimates, not the game's real mechanics.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass

from idle_advisor.config.loader import EstimationConfig
from idle_advisor.models.candidates import EstimateBasis
from idle_advisor.models.state import Building, NormalizedState, Upgrade

logger = logging.getLogger(__name__)

_MARKUP_PATTERN = re.compile(r"<[^>]+>")
_THOUSANDS_PATTERN = re.compile(r"(?<=\d),(?=\d{3}(?!\d))")
_MULTIPLIER_PATTERN = re.compile(r"(?P<num>\d+(?:\.\d+)?)\s*x\s+as\s+efficient")
_WORD_MULTIPLIER_PATTERN = re.compile(r"\b(?P<word>twice|thrice)\s+as\s+efficient")
_PERCENT_PATTERN = re.compile(r"(?P<num>\d+(?:\.\d+)?)\s*%")
_FLAT_CLICK_PATTERN = re.compile(
    r"\+\s*(?P<num>\d+(?:\.\d+)?)\s+[a-z]+\s+per\s+(?:click|tap)"
)
_WORD_MULTIPLIERS: dict[str, float] = {"twice": 2.0, "thrice": 3.0}

# Below any sensible min_meaningful_delta, so floored estimates never pay back
_ESTIMATE_FLOOR = 1e-12


@dataclass(frozen=True)
class UpgradeEstimate:
    """Estimated rate delta for one upgrade and the rule that produced it."""

    rate_delta: float
    basis: EstimateBasis


def clean_description(text: str) -> str:
    """Lowercase text with markup and thousands separators removed."""
    without_markup = _MARKUP_PATTERN.sub(" ", text)
    without_separators = _THOUSANDS_PATTERN.sub("", without_markup)
    return " ".join(without_separators.lower().split())


def _name_pattern(name: str) -> str:
    if name.endswith("y"):
        stem = rf"{re.escape(name[:-1])}(?:y|ies)"
    else:
        stem = rf"{re.escape(name)}(?:s|es)?"
    return rf"(?<![a-z0-9]){stem}(?![a-z0-9])"


def find_referenced_building(text: str, buildings: list[Building]) -> Building | None:
    """Find the building a (cleaned) description talks about.

    Names match as whole words, optionally pluralized ("grandmas",
    "factories"), so "bank" does not match "bankrupt".
    The earliest mention wins; the longer name wins a tie.
    """
    best: tuple[int, int] | None = None
    found: Building | None = None
    for building in buildings:
        name = building.name.strip().lower()
        if not name:
            continue
        match = re.search(_name_pattern(name), text)
        if match is None:
            continue
        rank = (match.start(), -len(name))
        if best is None or rank < best:
            best = rank
            found = building
    return found


class UpgradeEstimator:
    """Applies the description heuristics to a single upgrade."""

    def __init__(self, config: EstimationConfig | None = None) -> None:
        self._config = config or EstimationConfig()

    def estimate(self, upgrade: Upgrade, state: NormalizedState) -> UpgradeEstimate:
        """Estimate the rate an upgrade adds.

        The result is always strictly positive. Non-positive or non-finite
        estimates are floored to a value below ``min_meaningful_delta``, which
        the payback calculation turns into the non-finite sentinel.
        """
        text = clean_description(upgrade.description_text)
        rate_delta, basis = self._match(text, state)

        if not math.isfinite(rate_delta) or rate_delta <= 0:
            logger.debug(
                "Estimate for %s via %s was %s; flooring", upgrade.name, basis.value, rate_delta
            )
            rate_delta = _ESTIMATE_FLOOR
        return UpgradeEstimate(rate_delta=rate_delta, basis=basis)

    def _match(self, text: str, state: NormalizedState) -> tuple[float, EstimateBasis]:
        config = self._config
        building = find_referenced_building(text, state.buildings)

        multiplier = self._explicit_multiplier(text)
        if multiplier is not None and building is not None:
            return building.total_rate * (multiplier - 1), EstimateBasis.EXPLICIT_MULTIPLIER

        percent_match = _PERCENT_PATTERN.search(text)
        if percent_match:
            share = float(percent_match.group("num")) / 100
            if building is not None:
                return building.total_rate * share, EstimateBasis.PERCENTAGE_BOOST
            return state.rate * share, EstimateBasis.PERCENTAGE_BOOST

        flat_match = _FLAT_CLICK_PATTERN.search(text)
        if flat_match:
            per_click = float(flat_match.group("num"))
            return per_click * config.assumed_clicks_per_second, EstimateBasis.FLAT_CLICK_BONUS

        if building is not None:
            return building.total_rate * config.synergy_factor, EstimateBasis.BUILDING_SYNERGY

        if any(keyword.lower() in text for keyword in config.click_keywords if keyword):
            return state.rate * config.click_weight_factor, EstimateBasis.CLICK_KEYWORD

        return state.rate * config.conservative_boost_factor, EstimateBasis.UNKNOWN

    @staticmethod
    def _explicit_multiplier(text: str) -> float | None:
        match = _MULTIPLIER_PATTERN.search(text)
        if match:
            return float(match.group("num"))
        word_match = _WORD_MULTIPLIER_PATTERN.search(text)
        if word_match:
            return _WORD_MULTIPLIERS[word_match.group("word")]
        return None
