"""Colony model — the aggregate that owns its pops, jobs and buildings.

The colony is an arena: pops, founding jobs and buildings are held by value
in plain lists, and every cross-reference (job → pop, job → building, colony →
planet/system/empire) is an id.  Turn logic lives in
``colonysim.services.colony_service``; this module only holds state and the
derived values computed from it.
"""

from __future__ import annotations

import enum
import uuid
from collections import deque
from dataclasses import dataclass, field

from colonysim.config import settings
from colonysim.models.building import Building, BuildingType
from colonysim.models.job import Job
from colonysim.models.pop import Pop

MAX_INFRASTRUCTURE_LEVEL = 10


class ColonyType(str, enum.Enum):
    outpost = "outpost"          # < 50
    settlement = "settlement"    # 50-199
    colony = "colony"            # 200-499
    province = "province"        # 500-999
    major = "major"              # 1000-4999
    metropolis = "metropolis"    # 5000+


class ColonyStatus(str, enum.Enum):
    developing = "developing"
    stable = "stable"
    flourishing = "flourishing"
    civil_unrest = "civil_unrest"
    rebellion = "rebellion"
    occupied = "occupied"
    abandoned = "abandoned"


class ColonyEventType(str, enum.Enum):
    growth = "growth"
    famine = "famine"
    disease = "disease"
    natural_disaster = "natural_disaster"
    festival = "festival"
    scientific_discovery = "scientific_discovery"
    rebellion = "rebellion"
    riot = "riot"
    immigration = "immigration"
    emigration = "emigration"


@dataclass(frozen=True)
class ColonyEvent:
    event_type: ColonyEventType
    description: str
    turn: int


@dataclass
class ColonyProduction:
    credits: int = 0
    dilithium: int = 0
    duranium: int = 0
    food: int = 0
    research: int = 0
    production: int = 0

    def add(self, other: ColonyProduction) -> None:
        self.credits += other.credits
        self.dilithium += other.dilithium
        self.duranium += other.duranium
        self.food += other.food
        self.research += other.research
        self.production += other.production


@dataclass
class ColonyResources:
    """Per-turn resource rates, refreshed from each turn's production."""
    food_per_turn: int = 0
    credits_per_turn: int = 0
    dilithium_per_turn: int = 0
    duranium_per_turn: int = 0
    research_per_turn: int = 0
    production_per_turn: int = 0

    def update_from(self, production: ColonyProduction) -> None:
        self.food_per_turn = production.food
        self.credits_per_turn = production.credits
        self.dilithium_per_turn = production.dilithium
        self.duranium_per_turn = production.duranium
        self.research_per_turn = production.research
        self.production_per_turn = production.production


@dataclass
class ColonyTurnResult:
    colony_id: uuid.UUID
    colony_name: str
    turn: int
    previous_population: int = 0
    population_change: int = 0
    unemployed: int = 0
    production: ColonyProduction = field(default_factory=ColonyProduction)
    food_balance: int = 0
    new_morale: int = 0
    new_stability: int = 0
    bonus_research: int = 0
    maintenance_cost: int = 0
    colony_type: ColonyType = ColonyType.outpost
    status: ColonyStatus = ColonyStatus.developing
    events: list[ColonyEvent] = field(default_factory=list)


@dataclass
class GroundDefenseInfo:
    defense_level: int
    garrison_strength: int
    shield_strength: int
    fortification_level: int
    civilian_population: int
    loyalty: int
    morale: int


def _recent_event_log() -> deque[ColonyEvent]:
    return deque(maxlen=settings.recent_event_limit)


@dataclass
class Colony:
    name: str
    planet_id: uuid.UUID
    system_id: uuid.UUID
    owner_empire_id: uuid.UUID
    habitability: int
    base_max_population: int
    founded_on_turn: int = 0
    age_in_turns: int = 0
    colony_type: ColonyType = ColonyType.settlement
    status: ColonyStatus = ColonyStatus.developing
    morale: int = 50
    stability: int = 50
    loyalty: int = 100
    infrastructure_level: int = 0
    base_defense_level: int = 0
    pops: list[Pop] = field(default_factory=list)
    base_jobs: list[Job] = field(default_factory=list)
    buildings: list[Building] = field(default_factory=list)
    resources: ColonyResources = field(default_factory=ColonyResources)
    recent_events: deque[ColonyEvent] = field(default_factory=_recent_event_log)
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self) -> None:
        self.habitability = max(0, min(100, self.habitability))

    # -- population -----------------------------------------------------------

    @property
    def total_population(self) -> int:
        return sum(p.size for p in self.pops)

    @property
    def max_population(self) -> int:
        bonus = sum(b.get_scaled_bonuses().population_bonus for b in self.buildings)
        return self.base_max_population + bonus

    def get_pop(self, pop_id: uuid.UUID) -> Pop | None:
        return next((p for p in self.pops if p.id == pop_id), None)

    # -- buildings ------------------------------------------------------------

    @property
    def defense_level(self) -> int:
        bonus = sum(b.get_scaled_bonuses().defense_bonus for b in self.buildings)
        return self.base_defense_level + bonus

    @property
    def active_buildings(self) -> list[Building]:
        return [b for b in self.buildings if b.is_active and not b.is_destroyed]

    def get_building(self, building_id: uuid.UUID) -> Building | None:
        return next((b for b in self.buildings if b.id == building_id), None)

    def has_building(self, building_type: BuildingType) -> bool:
        return any(
            b.building_type == building_type and not b.is_destroyed for b in self.buildings
        )

    # -- jobs -----------------------------------------------------------------

    @property
    def jobs(self) -> list[Job]:
        """Every job the colony holds: founding jobs plus those of standing buildings."""
        building_jobs = [
            job for b in self.buildings if not b.is_destroyed for job in b.provided_jobs
        ]
        return self.base_jobs + building_jobs

    @property
    def available_jobs(self) -> list[Job]:
        """Jobs that can take workers: founding jobs plus those of active buildings."""
        building_jobs = [job for b in self.active_buildings for job in b.provided_jobs]
        return self.base_jobs + building_jobs

    @property
    def employed_population(self) -> int:
        return sum(job.filled_slots for job in self.jobs)

    @property
    def unemployed_population(self) -> int:
        return max(0, self.total_population - self.employed_population)

    @property
    def unemployment_rate(self) -> float:
        total = self.total_population
        if total == 0:
            return 0.0
        return self.unemployed_population / total

    # -- misc -----------------------------------------------------------------

    @property
    def food_consumption(self) -> int:
        return self.total_population // 10

    @property
    def maintenance_cost(self) -> int:
        return sum(b.get_maintenance_cost() for b in self.buildings if not b.is_destroyed)
