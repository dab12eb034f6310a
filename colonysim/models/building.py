"""Building model — a structure owned by a colony.

Health lifecycle:
  - 100 when built; ``damage`` and ``repair`` clamp it to 0-100
  - below 50 the building is inactive: no workers and no multiplier bonuses
  - at 0 it is destroyed: no jobs and no bonuses of any kind; the owning
    colony removes it at the next sweep

Bonuses scale with level: every declared bonus × (1 + (level − 1) × 0.5).
"""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field

from colonysim.models.job import Job

ACTIVE_HEALTH_THRESHOLD = 50
MAX_HEALTH = 100


class BuildingType(str, enum.Enum):
    # Resource
    farm = "farm"
    mine = "mine"
    dilithium_refinery = "dilithium_refinery"
    # Production
    factory = "factory"
    shipyard = "shipyard"
    # Research
    research_lab = "research_lab"
    science_academy = "science_academy"
    # Commerce
    trading_post = "trading_post"
    bank = "bank"
    trade_hub = "trade_hub"
    # Services
    hospital = "hospital"
    university = "university"
    entertainment_complex = "entertainment_complex"
    # Military
    garrison = "garrison"
    orbital_defense = "orbital_defense"
    shield_generator = "shield_generator"
    fortress_complex = "fortress_complex"
    intelligence_center = "intelligence_center"
    # Infrastructure
    starport = "starport"
    power_plant = "power_plant"
    housing = "housing"
    # Administration
    capitol = "capitol"


class BuildingCategory(str, enum.Enum):
    resource = "resource"
    production = "production"
    research = "research"
    commerce = "commerce"
    services = "services"
    military = "military"
    infrastructure = "infrastructure"
    administration = "administration"
    other = "other"


@dataclass(frozen=True)
class BuildingBonuses:
    credit_bonus: float = 0.0
    research_bonus: float = 0.0
    production_bonus: float = 0.0
    food_bonus: float = 0.0
    population_bonus: int = 0
    defense_bonus: int = 0
    morale_bonus: int = 0
    stability_bonus: int = 0

    def scaled(self, multiplier: float) -> BuildingBonuses:
        return BuildingBonuses(
            credit_bonus=self.credit_bonus * multiplier,
            research_bonus=self.research_bonus * multiplier,
            production_bonus=self.production_bonus * multiplier,
            food_bonus=self.food_bonus * multiplier,
            population_bonus=int(self.population_bonus * multiplier),
            defense_bonus=int(self.defense_bonus * multiplier),
            morale_bonus=int(self.morale_bonus * multiplier),
            stability_bonus=int(self.stability_bonus * multiplier),
        )


@dataclass
class Building:
    building_type: BuildingType
    name: str
    category: BuildingCategory
    bonuses: BuildingBonuses
    max_level: int = 5
    base_build_cost: int = 0
    base_maintenance_cost: int = 0
    build_time: int = 0
    required_infrastructure_level: int = 0
    required_building: BuildingType | None = None
    description: str = ""
    level: int = 1
    health: int = MAX_HEALTH
    is_active: bool = True
    construction_cost: int = 0
    provided_jobs: list[Job] = field(default_factory=list)
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def create(cls, building_type: BuildingType) -> Building:
        """Build a fully parameterized instance from the building catalog."""
        from colonysim.data.buildings import get_building_definition

        definition = get_building_definition(building_type)
        building = cls(
            building_type=building_type,
            name=definition.name,
            category=definition.category,
            bonuses=definition.bonuses,
            max_level=definition.max_level,
            base_build_cost=definition.base_build_cost,
            base_maintenance_cost=definition.base_maintenance_cost,
            build_time=definition.build_time,
            required_infrastructure_level=definition.required_infrastructure_level,
            required_building=definition.required_building,
            description=definition.description,
            construction_cost=definition.base_build_cost,
        )
        building.provided_jobs = [
            Job.create(kind, slots, building_id=building.id)
            for kind, slots in definition.jobs
        ]
        return building

    @property
    def is_destroyed(self) -> bool:
        return self.health <= 0

    # -- level ----------------------------------------------------------------

    def upgrade(self) -> bool:
        if self.level >= self.max_level:
            return False
        self.level += 1
        return True

    def downgrade(self) -> bool:
        if self.level <= 1:
            return False
        self.level -= 1
        return True

    def get_upgrade_cost(self) -> int:
        return self.base_build_cost * self.level

    def get_maintenance_cost(self) -> int:
        return self.base_maintenance_cost * self.level

    # -- health ---------------------------------------------------------------

    def damage(self, amount: int) -> None:
        self.health = max(0, self.health - max(0, amount))
        if self.health < ACTIVE_HEALTH_THRESHOLD:
            self.is_active = False

    def repair(self, amount: int) -> None:
        if self.is_destroyed:
            return
        self.health = min(MAX_HEALTH, self.health + max(0, amount))
        if self.health >= ACTIVE_HEALTH_THRESHOLD:
            self.is_active = True

    def activate(self) -> None:
        if self.health >= ACTIVE_HEALTH_THRESHOLD:
            self.is_active = True

    def deactivate(self) -> None:
        self.is_active = False

    # -- bonuses --------------------------------------------------------------

    def get_level_multiplier(self) -> float:
        return 1 + (self.level - 1) * 0.5

    def get_scaled_bonuses(self) -> BuildingBonuses:
        if self.is_destroyed:
            return BuildingBonuses()
        return self.bonuses.scaled(self.get_level_multiplier())
