"""Colony service — founding, construction and the per-turn pipeline.

Turn pipeline (process_turn), strictly in this order:
  1. Growth          per-pop growth at the colony growth rate, capped at capacity
  2. Job assignment  recomputed from scratch; heavy unemployment costs stability/morale
  3. Production      job output × leadership × active building bonuses × morale/stability
  4. Food balance    consumption = population / 10; a deficit is a famine
  5. Morale          drift toward 50 plus habitability, unemployment and entertainment
  6. Stability       drift toward 50 plus morale, loyalty, defense; < 10 is a rebellion
  7. Random events   deterministic stream seeded by (turn, colony id)
  8. Reclassify      colony type by population band, status by the state machine

Status state machine (evaluated in step 8):
  - population 0                 → abandoned (terminal)
  - rebellion                    → stays rebellion until suppress_rebellion()
  - stability < 20               → civil_unrest
  - age < 10 turns               → developing
  - infrastructure level >= 5    → flourishing
  - otherwise                    → stable

Every morale/stability/loyalty adjustment clamps to 0-100 as it is applied.
"""

from __future__ import annotations

import logging
import uuid

from colonysim.config import settings
from colonysim.data.buildings import check_prerequisites, get_building_definition
from colonysim.data.species import get_species
from colonysim.models.building import Building, BuildingType
from colonysim.models.colony import (
    MAX_INFRASTRUCTURE_LEVEL,
    Colony,
    ColonyEvent,
    ColonyEventType,
    ColonyProduction,
    ColonyStatus,
    ColonyTurnResult,
    ColonyType,
    GroundDefenseInfo,
)
from colonysim.models.job import Job, JobEffects, JobKind, JobOutput
from colonysim.models.pop import Pop, PopSpecies
from colonysim.services.event_service import roll_random_events
from colonysim.services.job_assignment import (
    apply_unemployment_penalty,
    reassign_jobs,
    worker_productivity,
)
from colonysim.services.results import Result

logger = logging.getLogger(__name__)

# Founding defaults
FOUNDING_MORALE = 60
FOUNDING_STABILITY = 70
FOUNDING_LOYALTY = 100
FOUNDING_INFRASTRUCTURE = 1
FOUNDING_JOBS: list[tuple[JobKind, int]] = [
    (JobKind.farmer, 5),
    (JobKind.miner, 3),
    (JobKind.administrator, 1),
]

BASE_GROWTH_RATE = 0.02
DEVELOPING_AGE = 10
FLOURISHING_INFRASTRUCTURE = 5
CIVIL_UNREST_STABILITY = 20
REBELLION_STABILITY = 10
LOW_STABILITY_PRODUCTION = 30
RESTORED_STABILITY = 30

# Colony type bands: (population upper bound, type)
COLONY_TYPE_BANDS: list[tuple[int, ColonyType]] = [
    (50, ColonyType.outpost),
    (200, ColonyType.settlement),
    (500, ColonyType.colony),
    (1000, ColonyType.province),
    (5000, ColonyType.major),
]


def _clamp(value: int) -> int:
    return max(0, min(100, value))


# ---------------------------------------------------------------------------
# Founding and population
# ---------------------------------------------------------------------------

def found_colony(
    name: str,
    planet_id: uuid.UUID,
    system_id: uuid.UUID,
    owner_empire_id: uuid.UUID,
    habitability: int,
    max_population: int,
    current_turn: int,
    initial_colonists: int = 10,
    species: PopSpecies = PopSpecies.human,
) -> Colony:
    """Create a colony with its first colonists and the default job set.

    Jobs are assigned immediately and the per-turn resource rates are seeded
    from the resulting production, so the first turn sees a real food balance.
    """
    colony = Colony(
        name=name,
        planet_id=planet_id,
        system_id=system_id,
        owner_empire_id=owner_empire_id,
        habitability=habitability,
        base_max_population=max(0, max_population),
        founded_on_turn=current_turn,
        colony_type=ColonyType.settlement,
        status=ColonyStatus.developing,
        morale=FOUNDING_MORALE,
        stability=FOUNDING_STABILITY,
        loyalty=FOUNDING_LOYALTY,
        infrastructure_level=FOUNDING_INFRASTRUCTURE,
    )
    colony.pops.append(Pop.colonists(initial_colonists, species))
    colony.base_jobs.extend(Job.create(kind, slots) for kind, slots in FOUNDING_JOBS)

    reassign_jobs(colony)
    colony.resources.update_from(calculate_production(colony))

    logger.info(
        "Founded colony %s (%s) for empire %s with %d %s colonists",
        colony.id, name, owner_empire_id, initial_colonists, species.value,
    )
    return colony


def add_pop(colony: Colony, pop: Pop) -> bool:
    """Add a pop if it fits under the population cap.  Returns whether it was added."""
    if colony.total_population + pop.size > colony.max_population:
        return False
    colony.pops.append(pop)
    reassign_jobs(colony)
    return True


def remove_empty_pops(colony: Colony) -> None:
    colony.pops = [p for p in colony.pops if p.size > 0]


def develop_infrastructure(colony: Colony, levels: int = 1) -> int:
    colony.infrastructure_level = max(
        0, min(MAX_INFRASTRUCTURE_LEVEL, colony.infrastructure_level + levels)
    )
    return colony.infrastructure_level


def add_job(colony: Colony, job: Job) -> None:
    colony.base_jobs.append(job)
    reassign_jobs(colony)


def remove_job(colony: Colony, job_id: uuid.UUID) -> Result[Job]:
    job = next((j for j in colony.base_jobs if j.id == job_id), None)
    if job is None:
        return Result.not_found("Job", job_id)
    colony.base_jobs.remove(job)
    reassign_jobs(colony)
    return Result.success(job)


# ---------------------------------------------------------------------------
# Buildings
# ---------------------------------------------------------------------------

def construct_building(
    colony: Colony,
    building_type: BuildingType,
    cost: int | None = None,
) -> Result[Building]:
    """Construct a building if its prerequisites are met.

    On success the building's jobs join the colony, its flat morale and
    stability bonuses are granted once, and jobs are reassigned.  Population
    and defense bonuses follow the building for as long as it stands.
    """
    try:
        definition = get_building_definition(building_type)
    except KeyError as exc:
        return Result.failure(str(exc))

    if colony.status == ColonyStatus.abandoned:
        return Result.failure(f"Colony {colony.name} has been abandoned")

    existing = [b.building_type for b in colony.buildings if not b.is_destroyed]
    reason = check_prerequisites(definition, colony.infrastructure_level, existing)
    if reason is not None:
        return Result.failure(reason)

    building = Building.create(building_type)
    if cost is not None:
        building.construction_cost = max(0, cost)
    colony.buildings.append(building)

    bonuses = building.get_scaled_bonuses()
    colony.morale = _clamp(colony.morale + bonuses.morale_bonus)
    colony.stability = _clamp(colony.stability + bonuses.stability_bonus)

    reassign_jobs(colony)
    logger.info("Colony %s constructed %s (%s)", colony.id, building.name, building.id)
    return Result.success(building)


def destroy_building(colony: Colony, building_id: uuid.UUID) -> Result[Building]:
    building = colony.get_building(building_id)
    if building is None:
        return Result.not_found("Building", building_id)
    colony.buildings.remove(building)
    reassign_jobs(colony)
    return Result.success(building)


def upgrade_building(colony: Colony, building_id: uuid.UUID) -> Result[Building]:
    building = colony.get_building(building_id)
    if building is None:
        return Result.not_found("Building", building_id)
    if building.is_destroyed:
        return Result.failure(f"{building.name} has been destroyed")
    if not building.upgrade():
        return Result.failure(f"{building.name} is already at max level {building.max_level}")
    return Result.success(building)


def repair_building(colony: Colony, building_id: uuid.UUID, amount: int) -> Result[Building]:
    building = colony.get_building(building_id)
    if building is None:
        return Result.not_found("Building", building_id)
    if building.is_destroyed:
        return Result.failure(f"{building.name} has been destroyed and cannot be repaired")
    was_active = building.is_active
    building.repair(amount)
    if building.is_active != was_active:
        reassign_jobs(colony)
    return Result.success(building)


def remove_destroyed_buildings(colony: Colony) -> list[Building]:
    """Drop buildings at 0 health along with their jobs."""
    destroyed = [b for b in colony.buildings if b.is_destroyed]
    if destroyed:
        colony.buildings = [b for b in colony.buildings if not b.is_destroyed]
        for building in destroyed:
            logger.info("Colony %s lost %s", colony.id, building.name)
    return destroyed


# ---------------------------------------------------------------------------
# Production
# ---------------------------------------------------------------------------

def _as_production(output: JobOutput) -> ColonyProduction:
    return ColonyProduction(
        credits=output.credits,
        dilithium=output.dilithium,
        duranium=output.duranium,
        food=output.food,
        research=output.research,
        production=output.production,
    )


def collect_job_effects(colony: Colony) -> JobEffects:
    effects = JobEffects()
    for job in colony.jobs:
        effects = effects.combine(job.get_special_effects())
    return effects


def calculate_production(colony: Colony, effects: JobEffects | None = None) -> ColonyProduction:
    """Resource output of the colony's current job assignment."""
    production = ColonyProduction()

    for job in colony.jobs:
        if job.filled_slots == 0:
            continue
        modifier = (
            worker_productivity(colony, job)
            if settings.pop_productivity_scales_output
            else 1.0
        )
        production.add(_as_production(job.calculate_output(modifier)))

    # Leadership jobs multiply everything they oversee
    if effects is None:
        effects = collect_job_effects(colony)
    if effects.production_multiplier != 1.0:
        production.credits = int(production.credits * effects.production_multiplier)
        production.research = int(production.research * effects.production_multiplier)
        production.production = int(production.production * effects.production_multiplier)

    # Active building bonuses compound one building at a time
    for building in colony.active_buildings:
        bonuses = building.get_scaled_bonuses()
        production.credits = int(production.credits * (1 + bonuses.credit_bonus))
        production.research = int(production.research * (1 + bonuses.research_bonus))
        production.production = int(production.production * (1 + bonuses.production_bonus))
        production.food = int(production.food * (1 + bonuses.food_bonus))

    morale_modifier = 0.5 + colony.morale / 100.0  # 0.5 - 1.5
    production.credits = int(production.credits * morale_modifier)
    production.research = int(production.research * morale_modifier)

    if colony.stability < LOW_STABILITY_PRODUCTION:
        stability_modifier = colony.stability / float(LOW_STABILITY_PRODUCTION)
        production.credits = int(production.credits * stability_modifier)
        production.production = int(production.production * stability_modifier)

    return production


def calculate_income(colony: Colony) -> int:
    """Flat credit income: 1 per 100 population plus 50 per trade hub."""
    trade_hubs = sum(
        1 for b in colony.buildings
        if b.building_type == BuildingType.trade_hub and not b.is_destroyed
    )
    return colony.total_population // 100 + trade_hubs * 50


# ---------------------------------------------------------------------------
# Turn stages
# ---------------------------------------------------------------------------

def calculate_growth_rate(colony: Colony, growth_bonus: float = 0.0) -> float:
    rate = BASE_GROWTH_RATE * (colony.habitability / 100.0)

    if colony.morale > 70:
        rate *= 1.2
    elif colony.morale < 30:
        rate *= 0.5

    food_surplus = colony.resources.food_per_turn - colony.food_consumption
    if food_surplus > 0:
        rate *= 1.1
    elif food_surplus < 0:
        rate *= 0.3

    rate *= 1 + colony.infrastructure_level * 0.05
    return rate + growth_bonus


def grow_population(colony: Colony, growth_bonus: float = 0.0) -> int:
    """Grow each pop by the colony growth rate.  Returns the total growth."""
    if colony.total_population >= colony.max_population:
        return 0

    rate = calculate_growth_rate(colony, growth_bonus)
    grown = 0
    for pop in colony.pops:
        capacity = colony.max_population - colony.total_population
        if capacity <= 0:
            break
        growth = int(pop.size * rate * get_species(pop.species).growth_bonus)
        growth = min(growth, capacity)
        if growth > 0:
            pop.grow(growth)
            grown += growth
    return grown


def apply_pop_effects(colony: Colony, effects: JobEffects) -> None:
    """Doctors and teachers improve every pop's health and education."""
    if effects.health_bonus == 0 and effects.education_bonus == 0:
        return
    for pop in colony.pops:
        pop.improve_health(effects.health_bonus)
        pop.educate(effects.education_bonus)


def update_morale(colony: Colony, effects: JobEffects | None = None) -> int:
    if colony.morale > 50:
        colony.morale -= 1
    elif colony.morale < 50:
        colony.morale += 1

    if colony.habitability < 50:
        colony.morale = _clamp(colony.morale - 2)
    elif colony.habitability > 80:
        colony.morale = _clamp(colony.morale + 1)

    unemployment_rate = colony.unemployment_rate
    if unemployment_rate > 0.3:
        colony.morale = _clamp(colony.morale - 5)
    elif unemployment_rate < 0.1:
        colony.morale = _clamp(colony.morale + 1)

    if colony.has_building(BuildingType.entertainment_complex):
        colony.morale = _clamp(colony.morale + 3)

    if effects is not None and effects.morale_bonus:
        colony.morale = _clamp(colony.morale + effects.morale_bonus)

    return colony.morale


def update_stability(
    colony: Colony,
    effects: JobEffects | None = None,
    events: list[ColonyEvent] | None = None,
    turn: int = 0,
) -> int:
    if colony.stability > 50:
        colony.stability -= 1
    elif colony.stability < 50:
        colony.stability += 1

    if colony.morale < 20:
        colony.stability = _clamp(colony.stability - 3)
    elif colony.morale > 80:
        colony.stability = _clamp(colony.stability + 1)

    if colony.loyalty < 30:
        colony.stability = _clamp(colony.stability - 5)

    colony.stability = _clamp(colony.stability + colony.defense_level // 2)

    if effects is not None and effects.stability_bonus:
        colony.stability = _clamp(colony.stability + effects.stability_bonus)

    if colony.stability < REBELLION_STABILITY and colony.total_population > 0:
        if events is not None:
            events.append(ColonyEvent(
                ColonyEventType.rebellion,
                "Civil unrest threatens to overthrow colonial government!",
                turn,
            ))
        if colony.status != ColonyStatus.rebellion:
            logger.warning("Colony %s (%s) has risen in rebellion", colony.id, colony.name)
        colony.status = ColonyStatus.rebellion

    return colony.stability


def classify_colony_type(population: int) -> ColonyType:
    for upper_bound, colony_type in COLONY_TYPE_BANDS:
        if population < upper_bound:
            return colony_type
    return ColonyType.metropolis


def _status_from_table(colony: Colony) -> ColonyStatus:
    if colony.total_population == 0:
        return ColonyStatus.abandoned
    if colony.stability < CIVIL_UNREST_STABILITY:
        return ColonyStatus.civil_unrest
    if colony.age_in_turns < DEVELOPING_AGE:
        return ColonyStatus.developing
    if colony.infrastructure_level >= FLOURISHING_INFRASTRUCTURE:
        return ColonyStatus.flourishing
    return ColonyStatus.stable


def update_status(
    colony: Colony, events: list[ColonyEvent] | None = None, turn: int = 0
) -> ColonyStatus:
    previous = colony.status
    if previous == ColonyStatus.abandoned:
        return previous
    if colony.total_population == 0:
        colony.status = ColonyStatus.abandoned
        return colony.status
    if previous == ColonyStatus.rebellion:
        return previous

    colony.status = _status_from_table(colony)
    if (
        colony.status == ColonyStatus.civil_unrest
        and previous != ColonyStatus.civil_unrest
        and events is not None
    ):
        events.append(ColonyEvent(
            ColonyEventType.riot,
            "Riots break out as order in the colony collapses.",
            turn,
        ))
    return colony.status


# ---------------------------------------------------------------------------
# Turn processing
# ---------------------------------------------------------------------------

def process_turn(colony: Colony, turn: int) -> ColonyTurnResult:
    """Resolve one full turn for the colony and return its outcome."""
    colony.age_in_turns = max(0, turn - colony.founded_on_turn)
    remove_destroyed_buildings(colony)
    remove_empty_pops(colony)

    result = ColonyTurnResult(
        colony_id=colony.id,
        colony_name=colony.name,
        turn=turn,
        previous_population=colony.total_population,
    )

    # 1. Growth (doctors hired last turn boost the rate)
    growth_bonus = collect_job_effects(colony).pop_growth_bonus
    grow_population(colony, growth_bonus)
    result.population_change = colony.total_population - result.previous_population

    # 2. Job assignment
    unemployed = reassign_jobs(colony)
    apply_unemployment_penalty(colony, unemployed)
    result.unemployed = unemployed
    effects = collect_job_effects(colony)

    # 3. Production
    production = calculate_production(colony, effects)
    result.production = production
    colony.resources.update_from(production)
    apply_pop_effects(colony, effects)

    # 4. Food balance
    result.food_balance = production.food - colony.food_consumption
    if result.food_balance < 0:
        colony.morale = _clamp(colony.morale - 10)
        colony.stability = _clamp(colony.stability - 5)
        result.events.append(ColonyEvent(
            ColonyEventType.famine,
            "Food shortage! People are going hungry.",
            turn,
        ))
        logger.warning(
            "Famine on colony %s (%s): food balance %d",
            colony.id, colony.name, result.food_balance,
        )

    # 5-6. Morale and stability
    update_morale(colony, effects)
    update_stability(colony, effects, result.events, turn)

    # 7. Random events
    random_events, bonus_research = roll_random_events(colony, turn)
    result.events.extend(random_events)
    result.bonus_research = bonus_research
    remove_destroyed_buildings(colony)

    # 8. Reclassification
    colony.colony_type = classify_colony_type(colony.total_population)
    update_status(colony, result.events, turn)

    result.new_morale = colony.morale
    result.new_stability = colony.stability
    result.colony_type = colony.colony_type
    result.status = colony.status
    result.maintenance_cost = colony.maintenance_cost
    colony.recent_events.extend(result.events)
    return result


# ---------------------------------------------------------------------------
# External interventions
# ---------------------------------------------------------------------------

def take_damage(colony: Colony, damage: int, is_orbital_bombardment: bool) -> None:
    """Apply combat damage.  Jobs are reassigned; the full pipeline is not re-run."""
    damage = max(0, damage)
    if is_orbital_bombardment:
        for building in colony.buildings[: damage // 10]:
            building.damage(30)

        casualties = damage // 5
        for pop in [p for p in colony.pops if p.size > 0][:casualties]:
            pop.take_casualties(pop.size // 10)

        colony.morale = _clamp(colony.morale - 20)
        colony.stability = _clamp(colony.stability - 15)
        colony.infrastructure_level = max(0, colony.infrastructure_level - 1)
    else:
        colony.morale = _clamp(colony.morale - 10)
        colony.stability = _clamp(colony.stability - 10)

    remove_destroyed_buildings(colony)
    remove_empty_pops(colony)
    reassign_jobs(colony)


def suppress_rebellion(colony: Colony, stability: int = RESTORED_STABILITY) -> Result[ColonyStatus]:
    """Clear a rebellion by outside intervention and re-evaluate the status."""
    if colony.status != ColonyStatus.rebellion:
        return Result.failure(f"Colony {colony.name} is not in rebellion")
    colony.stability = _clamp(max(colony.stability, stability))
    colony.status = _status_from_table(colony)
    logger.info("Rebellion on colony %s suppressed; status now %s", colony.id, colony.status.value)
    return Result.success(colony.status)


def change_owner(colony: Colony, new_owner_empire_id: uuid.UUID, was_conquered: bool = False) -> None:
    previous_owner = colony.owner_empire_id
    colony.owner_empire_id = new_owner_empire_id
    if was_conquered:
        colony.loyalty = _clamp(colony.loyalty - 50)
        colony.morale = _clamp(colony.morale - 30)
        colony.stability = _clamp(colony.stability - 20)
        colony.status = ColonyStatus.occupied
    logger.info(
        "Colony %s passed from empire %s to %s (conquered=%s)",
        colony.id, previous_owner, new_owner_empire_id, was_conquered,
    )


def get_defense_info(colony: Colony) -> GroundDefenseInfo:
    standing = [b for b in colony.buildings if not b.is_destroyed]
    return GroundDefenseInfo(
        defense_level=colony.defense_level,
        garrison_strength=sum(
            b.level * 100 for b in standing if b.building_type == BuildingType.garrison
        ),
        shield_strength=500 if any(
            b.building_type == BuildingType.shield_generator for b in standing
        ) else 0,
        fortification_level=sum(
            1 for b in standing if b.building_type == BuildingType.fortress_complex
        ),
        civilian_population=colony.total_population,
        loyalty=colony.loyalty,
        morale=colony.morale,
    )

