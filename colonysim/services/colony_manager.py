"""Per-empire colony bookkeeping: migration between colonies and turn aggregation.

Anything that touches more than one colony (migration, whole-empire turn
processing) runs under the manager's lock so that floor and capacity checks
see a consistent snapshot of both sides.
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field

from colonysim.models.building import Building, BuildingType
from colonysim.models.colony import (
    Colony,
    ColonyEvent,
    ColonyEventType,
    ColonyProduction,
    ColonyStatus,
    ColonyTurnResult,
    ColonyType,
)
from colonysim.models.pop import Pop, PopSpecies
from colonysim.services import colony_service
from colonysim.services.job_assignment import reassign_jobs
from colonysim.services.results import Result

logger = logging.getLogger(__name__)

MIN_COLONISTS = 10
MIGRATION_POPULATION_FLOOR = 10
FORCED_MIGRATION_HAPPINESS_PENALTY = 20
FORCED_MIGRATION_STABILITY_PENALTY = 10
UNSTABLE_THRESHOLD = 30
UNHAPPY_THRESHOLD = 30


@dataclass
class EmpireColonyTurnResult:
    empire_id: uuid.UUID
    turn: int
    colony_results: list[ColonyTurnResult] = field(default_factory=list)
    total_production: ColonyProduction = field(default_factory=ColonyProduction)
    total_research: int = 0
    total_population: int = 0
    average_morale: float = 0.0
    average_stability: float = 0.0
    rebellions: list[uuid.UUID] = field(default_factory=list)
    famines: list[uuid.UUID] = field(default_factory=list)
    abandoned: list[uuid.UUID] = field(default_factory=list)


@dataclass
class EmpireEconomicSummary:
    empire_id: uuid.UUID
    colony_count: int
    total_population: int
    total_production: ColonyProduction
    total_maintenance: int
    trade_income: int
    net_credits: int
    average_morale: float
    average_stability: float
    colonies_by_type: dict[ColonyType, int]


class ColonyManager:
    """Ordered, duplicate-free collection of one empire's colonies."""

    def __init__(self, empire_id: uuid.UUID) -> None:
        self.empire_id = empire_id
        self._colonies: list[Colony] = []
        self._lock = threading.RLock()

    @property
    def colonies(self) -> list[Colony]:
        return list(self._colonies)

    # ── Collection ────────────────────────────────────────────────────────────

    def get_colony(self, colony_id: uuid.UUID) -> Colony | None:
        return next((c for c in self._colonies if c.id == colony_id), None)

    def add_colony(self, colony: Colony) -> Result[Colony]:
        with self._lock:
            if colony.owner_empire_id != self.empire_id:
                return Result.failure(
                    f"Colony {colony.name} belongs to empire {colony.owner_empire_id}"
                )
            if self.get_colony(colony.id) is not None:
                return Result.failure(f"Colony {colony.name} is already managed")
            self._colonies.append(colony)
            return Result.success(colony)

    def remove_colony(self, colony_id: uuid.UUID) -> Result[Colony]:
        with self._lock:
            colony = self.get_colony(colony_id)
            if colony is None:
                return Result.not_found("Colony", colony_id)
            self._colonies.remove(colony)
            return Result.success(colony)

    def colonize(
        self,
        planet_id: uuid.UUID,
        system_id: uuid.UUID,
        name: str,
        initial_colonists: int,
        species: PopSpecies,
        habitability: int,
        max_population: int,
        current_turn: int,
    ) -> Result[Colony]:
        """Found a new colony for this empire."""
        if initial_colonists < MIN_COLONISTS:
            return Result.failure(f"Need at least {MIN_COLONISTS} colonists to found a colony")
        if initial_colonists > max_population:
            return Result.failure(
                f"{initial_colonists} colonists exceed the planet's capacity of {max_population}"
            )

        colony = colony_service.found_colony(
            name=name,
            planet_id=planet_id,
            system_id=system_id,
            owner_empire_id=self.empire_id,
            habitability=habitability,
            max_population=max_population,
            current_turn=current_turn,
            initial_colonists=initial_colonists,
            species=species,
        )
        with self._lock:
            self._colonies.append(colony)
        return Result.success(colony)

    def abandon_colony(self, colony_id: uuid.UUID) -> Result[Colony]:
        with self._lock:
            colony = self.get_colony(colony_id)
            if colony is None:
                return Result.not_found("Colony", colony_id)
            colony.status = ColonyStatus.abandoned
            self._colonies.remove(colony)
        logger.info("Empire %s abandoned colony %s (%s)", self.empire_id, colony.id, colony.name)
        return Result.success(colony)

    def construct_building(
        self,
        colony_id: uuid.UUID,
        building_type: BuildingType,
        cost: int | None = None,
    ) -> Result[Building]:
        colony = self.get_colony(colony_id)
        if colony is None:
            return Result.not_found("Colony", colony_id)
        return colony_service.construct_building(colony, building_type, cost)

    # ── Migration ─────────────────────────────────────────────────────────────

    def migrate_pops(
        self,
        source_id: uuid.UUID,
        destination_id: uuid.UUID,
        count: int,
        forced: bool = False,
    ) -> Result[int]:
        """Move ``count`` people from one colony to another.

        A single pop in the source must be large enough to supply them all.
        The source may not drop below the population floor, the destination
        may not exceed its capacity, and without ``forced`` people will not
        move to a colony whose morale is below their own happiness.
        """
        with self._lock:
            source = self.get_colony(source_id)
            if source is None:
                return Result.not_found("Colony", source_id)
            destination = self.get_colony(destination_id)
            if destination is None:
                return Result.not_found("Colony", destination_id)
            if source.id == destination.id:
                return Result.failure("Source and destination must differ")
            if count <= 0:
                return Result.failure("Migration count must be positive")

            if source.total_population - count < MIGRATION_POPULATION_FLOOR:
                return Result.failure(
                    f"{source.name} cannot drop below {MIGRATION_POPULATION_FLOOR} population"
                )
            if destination.total_population + count > destination.max_population:
                return Result.failure(f"{destination.name} lacks room for {count} more")

            # Least happy eligible group leaves first.
            pop = min(
                (p for p in source.pops if p.size >= count),
                key=lambda p: p.happiness,
                default=None,
            )
            if pop is None:
                return Result.failure(f"No single population group in {source.name} has {count} people")

            if not forced and pop.happiness > destination.morale:
                return Result.failure(
                    f"Population won't voluntarily move to less happy colony {destination.name}"
                )

            pop.size -= count
            migrants = Pop(
                size=count,
                species=pop.species,
                stratum=pop.stratum,
                happiness=pop.happiness,
                education=pop.education,
                health=pop.health,
                ethos=pop.ethos,
                traits=list(pop.traits),
                is_refugee=pop.is_refugee,
                origin_empire_id=pop.origin_empire_id,
                generations_since_immigration=pop.generations_since_immigration,
            )
            if forced:
                migrants.adjust_happiness(-FORCED_MIGRATION_HAPPINESS_PENALTY)
                source.stability = max(0, source.stability - FORCED_MIGRATION_STABILITY_PENALTY)

            colony_service.remove_empty_pops(source)
            destination.pops.append(migrants)
            reassign_jobs(source)
            reassign_jobs(destination)

            turn = max(
                source.founded_on_turn + source.age_in_turns,
                destination.founded_on_turn + destination.age_in_turns,
            )
            source.recent_events.append(ColonyEvent(
                ColonyEventType.emigration,
                f"{count} {migrants.species.value} left for {destination.name}.",
                turn,
            ))
            destination.recent_events.append(ColonyEvent(
                ColonyEventType.immigration,
                f"{count} {migrants.species.value} arrived from {source.name}.",
                turn,
            ))

        logger.info(
            "Migrated %d from %s to %s (forced=%s)",
            count, source.name, destination.name, forced,
        )
        return Result.success(count)

    # ── Turn processing ───────────────────────────────────────────────────────

    def process_all_colonies(self, turn: int) -> EmpireColonyTurnResult:
        """Run one turn for every colony and aggregate the outcome.

        Colonies abandoned during the turn are removed from the manager.
        """
        result = EmpireColonyTurnResult(empire_id=self.empire_id, turn=turn)

        with self._lock:
            for colony in list(self._colonies):
                colony_result = colony_service.process_turn(colony, turn)
                result.colony_results.append(colony_result)
                result.total_production.add(colony_result.production)
                result.total_research += colony_result.bonus_research

                event_types = {e.event_type for e in colony_result.events}
                if ColonyEventType.rebellion in event_types:
                    result.rebellions.append(colony.id)
                if ColonyEventType.famine in event_types:
                    result.famines.append(colony.id)
                if colony.status == ColonyStatus.abandoned:
                    result.abandoned.append(colony.id)
                    self._colonies.remove(colony)
                    logger.info("Colony %s (%s) has been abandoned", colony.id, colony.name)

            result.total_research += result.total_production.research
            result.total_population = sum(c.total_population for c in self._colonies)
            if self._colonies:
                result.average_morale = sum(c.morale for c in self._colonies) / len(self._colonies)
                result.average_stability = sum(c.stability for c in self._colonies) / len(self._colonies)

        return result

    # ── Queries ───────────────────────────────────────────────────────────────

    def get_total_production(self) -> ColonyProduction:
        total = ColonyProduction()
        for colony in self._colonies:
            total.add(colony_service.calculate_production(colony))
        return total

    def get_colonies_by_type(self, colony_type: ColonyType) -> list[Colony]:
        return [c for c in self._colonies if c.colony_type == colony_type]

    def get_colonies_in_system(self, system_id: uuid.UUID) -> list[Colony]:
        return [c for c in self._colonies if c.system_id == system_id]

    def get_unstable_colonies(self) -> list[Colony]:
        """Colonies below the stability threshold, least stable first."""
        return sorted(
            (c for c in self._colonies if c.stability < UNSTABLE_THRESHOLD),
            key=lambda c: c.stability,
        )

    def get_unhappy_colonies(self) -> list[Colony]:
        return sorted(
            (c for c in self._colonies if c.morale < UNHAPPY_THRESHOLD),
            key=lambda c: c.morale,
        )

    def get_capitol(self) -> Colony | None:
        """The most populous colony with a Capitol, if any."""
        return max(
            (c for c in self._colonies if c.has_building(BuildingType.capitol)),
            key=lambda c: c.total_population,
            default=None,
        )

    def get_economic_summary(self) -> EmpireEconomicSummary:
        colonies = self.colonies
        production = self.get_total_production()
        maintenance = sum(c.maintenance_cost for c in colonies)
        income = sum(colony_service.calculate_income(c) for c in colonies)
        by_type: dict[ColonyType, int] = {}
        for colony in colonies:
            by_type[colony.colony_type] = by_type.get(colony.colony_type, 0) + 1

        count = len(colonies)
        return EmpireEconomicSummary(
            empire_id=self.empire_id,
            colony_count=count,
            total_population=sum(c.total_population for c in colonies),
            total_production=production,
            total_maintenance=maintenance,
            trade_income=income,
            net_credits=production.credits + income - maintenance,
            average_morale=sum(c.morale for c in colonies) / count if count else 0.0,
            average_stability=sum(c.stability for c in colonies) / count if count else 0.0,
            colonies_by_type=by_type,
        )
