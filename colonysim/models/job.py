"""Job model — a typed block of work slots owned by a colony or a building.

A job never owns pops.  ``assigned_workers`` is a reference-count table keyed
by pop id, and ``filled_slots`` is always its sum, never above ``total_slots``.
"""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field

from colonysim.models.pop import Pop, PopStratum


class JobKind(str, enum.Enum):
    farmer = "farmer"
    miner = "miner"
    dilithium_miner = "dilithium_miner"
    factory_worker = "factory_worker"
    engineer = "engineer"
    scientist = "scientist"
    lead_scientist = "lead_scientist"
    administrator = "administrator"
    governor = "governor"
    merchant = "merchant"
    banker = "banker"
    security_officer = "security_officer"
    intelligence_agent = "intelligence_agent"
    entertainer = "entertainer"
    doctor = "doctor"
    teacher = "teacher"
    starfleet_officer = "starfleet_officer"
    shipyard_worker = "shipyard_worker"


class JobCategory(str, enum.Enum):
    agriculture = "agriculture"
    extraction = "extraction"
    manufacturing = "manufacturing"
    technical = "technical"
    research = "research"
    administration = "administration"
    leadership = "leadership"
    commerce = "commerce"
    security = "security"
    services = "services"
    military = "military"


class ResourceType(str, enum.Enum):
    credits = "credits"
    dilithium = "dilithium"
    duranium = "duranium"
    tritanium = "tritanium"
    food = "food"
    research = "research"
    production = "production"


@dataclass
class JobOutput:
    credits: int = 0
    dilithium: int = 0
    duranium: int = 0
    food: int = 0
    research: int = 0
    production: int = 0


@dataclass
class JobEffects:
    """Non-resource effects of a staffed job."""
    stability_bonus: int = 0
    morale_bonus: int = 0
    health_bonus: int = 0
    education_bonus: int = 0
    pop_growth_bonus: float = 0.0
    production_multiplier: float = 1.0

    def combine(self, other: JobEffects) -> JobEffects:
        return JobEffects(
            stability_bonus=self.stability_bonus + other.stability_bonus,
            morale_bonus=self.morale_bonus + other.morale_bonus,
            health_bonus=self.health_bonus + other.health_bonus,
            education_bonus=self.education_bonus + other.education_bonus,
            pop_growth_bonus=self.pop_growth_bonus + other.pop_growth_bonus,
            production_multiplier=self.production_multiplier * other.production_multiplier,
        )


# Resource type -> JobOutput field
_OUTPUT_FIELD: dict[ResourceType, str] = {
    ResourceType.credits: "credits",
    ResourceType.dilithium: "dilithium",
    ResourceType.duranium: "duranium",
    ResourceType.food: "food",
    ResourceType.research: "research",
    ResourceType.production: "production",
}


@dataclass
class Job:
    kind: JobKind
    name: str
    category: JobCategory
    total_slots: int
    base_output: int
    output_type: ResourceType
    priority: int
    minimum_stratum: PopStratum = PopStratum.worker
    minimum_education: int = 0
    description: str = ""
    building_id: uuid.UUID | None = None
    assigned_workers: dict[uuid.UUID, int] = field(default_factory=dict)
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def create(
        cls,
        kind: JobKind,
        slots: int | None = None,
        building_id: uuid.UUID | None = None,
    ) -> Job:
        """Instantiate a job from the job catalog; ``slots`` overrides the default."""
        from colonysim.data.jobs import get_job_definition

        definition = get_job_definition(kind)
        return cls(
            kind=kind,
            name=definition.name,
            category=definition.category,
            total_slots=definition.default_slots if slots is None else max(0, slots),
            base_output=definition.base_output,
            output_type=definition.output_type,
            priority=definition.priority,
            minimum_stratum=definition.minimum_stratum,
            minimum_education=definition.minimum_education,
            description=definition.description,
            building_id=building_id,
        )

    @property
    def filled_slots(self) -> int:
        return sum(self.assigned_workers.values())

    @property
    def available_slots(self) -> int:
        return max(0, self.total_slots - self.filled_slots)

    def meets_requirements(self, pop: Pop) -> bool:
        return (
            pop.stratum.rank >= self.minimum_stratum.rank
            and pop.education >= self.minimum_education
        )

    # -- worker management ----------------------------------------------------

    def assign_workers(self, pop_id: uuid.UUID, count: int) -> int:
        """Assign up to ``count`` workers from a pop; returns how many were taken."""
        if count <= 0:
            return 0
        assigned = min(count, self.available_slots)
        if assigned <= 0:
            return 0
        self.assigned_workers[pop_id] = self.assigned_workers.get(pop_id, 0) + assigned
        return assigned

    def remove_workers(self, pop_id: uuid.UUID, count: int) -> int:
        current = self.assigned_workers.get(pop_id)
        if current is None or count <= 0:
            return 0
        removed = min(count, current)
        if current - removed <= 0:
            del self.assigned_workers[pop_id]
        else:
            self.assigned_workers[pop_id] = current - removed
        return removed

    def clear_workers(self) -> None:
        self.assigned_workers.clear()

    def add_slots(self, count: int) -> None:
        self.total_slots += max(0, count)

    def remove_slots(self, count: int) -> None:
        """Shrink the job; workers are laid off in assignment order until it fits."""
        self.total_slots = max(0, self.total_slots - max(0, count))
        excess = self.filled_slots - self.total_slots
        while excess > 0 and self.assigned_workers:
            pop_id, assigned = next(iter(self.assigned_workers.items()))
            excess -= self.remove_workers(pop_id, min(excess, assigned))

    # -- output ---------------------------------------------------------------

    def calculate_output(self, productivity_modifier: float = 1.0) -> JobOutput:
        filled = self.filled_slots
        if filled == 0:
            return JobOutput()
        effective = int(self.base_output * filled * productivity_modifier)
        output_field = _OUTPUT_FIELD.get(self.output_type)
        if output_field is None:
            return JobOutput()
        return JobOutput(**{output_field: effective})

    def get_special_effects(self) -> JobEffects:
        filled = self.filled_slots
        if filled == 0:
            return JobEffects()

        if self.category == JobCategory.security:
            return JobEffects(stability_bonus=filled * 2)
        if self.kind == JobKind.entertainer:
            return JobEffects(morale_bonus=filled * 3)
        if self.kind == JobKind.doctor:
            return JobEffects(health_bonus=filled * 5, pop_growth_bonus=0.01 * filled)
        if self.kind == JobKind.teacher:
            return JobEffects(education_bonus=filled * 2)
        if self.category == JobCategory.leadership:
            return JobEffects(
                production_multiplier=1 + filled * 0.05,
                stability_bonus=filled * 3,
            )
        return JobEffects()
