"""Normalized game state models.

These are the only shapes the economic model sees; every external value has
been resolved into plain numbers and strings by the time one is constructed.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Building(BaseModel):
    """A building type the player can buy more of."""

    id: str = Field(..., min_length=1, description="Stable key, unique within the snapshot")
    name: str = Field(..., min_length=1, description="Display name")
    owned: int = Field(default=0, ge=0, description="Units currently held")
    acquisition_cost: float = Field(..., ge=0, description="Cost of the next unit")
    unit_rate: float = Field(..., ge=0, description="Base rate of a single unit")
    total_rate: float = Field(
        default=0.0, ge=0, description="Observed rate of all owned units, multipliers included"
    )
    unlocked: bool = Field(default=True, description="Whether the source reports it unlocked")

    model_config = {"frozen": True}

    @property
    def effective_multiplier(self) -> float:
        """Net multiplier implied by the observed aggregate rate.

        Only meaningful once at least one unit is owned; otherwise 1.0.
        """
        if self.owned > 0 and self.total_rate > 0 and self.unit_rate > 0:
            return self.total_rate / (self.unit_rate * self.owned)
        return 1.0


class Upgrade(BaseModel):
    """A one-off upgrade currently offered in the store."""

    id: str = Field(..., min_length=1, description="Positional identifier")
    name: str = Field(..., min_length=1, description="Display name")
    acquisition_cost: float = Field(..., ge=0, description="Purchase price")
    description_text: str = Field(default="", description="Free-form effect text")
    available: bool = Field(default=True, description="Can be purchased now")
    pool: str = Field(default="standard", description="Upgrade pool reported by the source")

    model_config = {"frozen": True}


class NormalizedState(BaseModel):
    """A snapshot of the economy, rebuilt on every analysis call."""

    currency: float = Field(..., ge=0, description="Current spendable resource")
    rate: float = Field(..., ge=0, description="Current passive generation rate per second")
    buildings: list[Building] = Field(default_factory=list)
    upgrades: list[Upgrade] = Field(default_factory=list)
    skipped: list[str] = Field(
        default_factory=list, description="Notes for items dropped during extraction"
    )

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        """Check whether no admissible building or upgrade was extracted."""
        return not self.buildings and not self.upgrades

    def get_building(self, building_id: str) -> Building | None:
        """Get a building by its id."""
        for building in self.buildings:
            if building.id == building_id:
                return building
        return None

    def find_building(self, name: str) -> Building | None:
        """Find a building by display name, ignoring case."""
        lowered = name.strip().lower()
        for building in self.buildings:
            if building.name.lower() == lowered:
                return building
        return None

    def get_upgrade(self, upgrade_id: str) -> Upgrade | None:
        """Get an upgrade by its id."""
        for upgrade in self.upgrades:
            if upgrade.id == upgrade_id:
                return upgrade
        return None
