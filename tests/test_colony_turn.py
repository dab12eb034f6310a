"""Tests for the colony turn pipeline.

Covers:
- found_colony defaults: morale/stability/loyalty, founding jobs, seeded resources
- Growth rate formula and per-pop growth capped at capacity
- Production: job output, leadership multiplier, building bonuses, morale and
  low-stability factors, pop productivity scaling
- Famine on food deficit
- Morale and stability drift rules
- Status state machine: developing, stable, flourishing, civil unrest (riot),
  sticky rebellion, abandoned
- Colony type bands
- Bounds hold over many turns
- take_damage, change_owner, suppress_rebellion, defense info, trade income
"""

import uuid

import pytest

from colonysim.config import settings
from colonysim.models.building import BuildingType
from colonysim.models.colony import (
    Colony,
    ColonyEventType,
    ColonyStatus,
    ColonyType,
)
from colonysim.models.job import Job, JobEffects, JobKind
from colonysim.models.pop import Pop, PopSpecies, PopStratum
from colonysim.services import colony_service
from colonysim.services.colony_service import (
    add_pop,
    apply_pop_effects,
    calculate_growth_rate,
    calculate_income,
    calculate_production,
    change_owner,
    classify_colony_type,
    construct_building,
    found_colony,
    get_defense_info,
    grow_population,
    process_turn,
    remove_job,
    suppress_rebellion,
    take_damage,
    update_morale,
    update_stability,
)
from colonysim.services.job_assignment import reassign_jobs


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _founded(colonists: int = 10, habitability: int = 80, max_population: int = 1000) -> Colony:
    return found_colony(
        name="New Hope",
        planet_id=uuid.uuid4(),
        system_id=uuid.uuid4(),
        owner_empire_id=uuid.uuid4(),
        habitability=habitability,
        max_population=max_population,
        current_turn=0,
        initial_colonists=colonists,
    )


def _bare(**overrides) -> Colony:
    values = dict(
        name="Outpost",
        planet_id=uuid.uuid4(),
        system_id=uuid.uuid4(),
        owner_empire_id=uuid.uuid4(),
        habitability=80,
        base_max_population=1000,
    )
    values.update(overrides)
    return Colony(**values)


def _event_types(result) -> set[ColonyEventType]:
    return {e.event_type for e in result.events}


@pytest.fixture
def flat_output(monkeypatch):
    """Job output independent of who works the job."""
    monkeypatch.setattr(settings, "pop_productivity_scales_output", False)


# ---------------------------------------------------------------------------
# Founding
# ---------------------------------------------------------------------------

def test_found_colony_defaults():
    colony = _founded()
    assert colony.total_population == 10
    assert (colony.morale, colony.stability, colony.loyalty) == (60, 70, 100)
    assert colony.infrastructure_level == 1
    assert colony.status == ColonyStatus.developing
    assert [(j.kind, j.total_slots) for j in colony.base_jobs] == [
        (JobKind.farmer, 5),
        (JobKind.miner, 3),
        (JobKind.administrator, 1),
    ]
    assert colony.employed_population == 9
    assert colony.resources.food_per_turn > 0


def test_add_pop_respects_capacity():
    colony = _founded(max_population=15)
    assert not add_pop(colony, Pop.colonists(6, PopSpecies.human))
    assert add_pop(colony, Pop.colonists(5, PopSpecies.human))
    assert colony.total_population == 15


def test_remove_unknown_job_is_not_found():
    result = remove_job(_founded(), uuid.uuid4())
    assert not result.is_success


# ---------------------------------------------------------------------------
# Growth
# ---------------------------------------------------------------------------

def test_growth_rate_example():
    colony = _founded(colonists=100, habitability=100)
    colony.morale = 80
    colony.infrastructure_level = 3

    assert calculate_growth_rate(colony) == pytest.approx(0.02 * 1.0 * 1.2 * 1.1 * 1.15)
    assert grow_population(colony) == 3
    assert colony.total_population == 103


def test_turn_growth_example():
    colony = _founded(colonists=100, habitability=100)
    colony.morale = 80
    colony.infrastructure_level = 3

    result = process_turn(colony, 1)

    assert result.previous_population == 100
    assert result.population_change == 3


def test_food_deficit_slows_growth():
    colony = _founded(colonists=100, habitability=100)
    colony.resources.food_per_turn = 0
    assert calculate_growth_rate(colony) == pytest.approx(0.02 * 0.3 * 1.05)


def test_growth_capped_at_capacity():
    colony = _founded(colonists=100, habitability=100, max_population=101)
    colony.morale = 80
    colony.infrastructure_level = 3

    assert grow_population(colony) == 1
    assert colony.total_population == colony.max_population
    assert grow_population(colony) == 0


def test_species_growth_bonus():
    colony = _bare(habitability=100)
    colony.pops.append(Pop.colonists(200, PopSpecies.borg_drone))
    # 0.02 × 0.3 (no food) × 0.5
    assert grow_population(colony) == 0
    colony.resources.food_per_turn = 100
    # 0.02 × 1.1 × 0.5 × 200
    assert grow_population(colony) == 2


# ---------------------------------------------------------------------------
# Production
# ---------------------------------------------------------------------------

def test_founding_production(flat_output):
    production = calculate_production(_founded())
    assert production.food == 50
    assert production.duranium == 24
    assert production.credits == 16  # 15 × morale factor 1.1


def test_no_staffed_jobs_means_no_output():
    colony = _bare(infrastructure_level=5)
    for building_type in (BuildingType.trading_post, BuildingType.research_lab, BuildingType.factory):
        assert construct_building(colony, building_type).is_success

    production = calculate_production(colony)

    assert (production.credits, production.research, production.production) == (0, 0, 0)


def test_leadership_multiplies_output(flat_output):
    colony = _bare()
    colony.base_jobs.extend([Job.create(JobKind.governor), Job.create(JobKind.merchant)])
    colony.pops.append(Pop.colonists(4, PopSpecies.human))
    reassign_jobs(colony)

    assert calculate_production(colony).credits == 63


def test_building_bonus_applies_to_output(flat_output):
    colony = _bare()
    construct_building(colony, BuildingType.farm)
    colony.pops.append(Pop.colonists(5, PopSpecies.human))
    reassign_jobs(colony)

    assert calculate_production(colony).food == 60


def test_inactive_building_gives_no_bonus(flat_output):
    colony = _bare()
    colony.base_jobs.append(Job.create(JobKind.farmer))
    farm = construct_building(colony, BuildingType.farm).value
    farm.damage(60)
    colony.pops.append(Pop.colonists(5, PopSpecies.human))
    reassign_jobs(colony)

    assert calculate_production(colony).food == 50


def test_low_stability_cuts_credits(flat_output):
    colony = _bare(stability=15)
    colony.base_jobs.append(Job.create(JobKind.merchant))
    colony.pops.append(Pop.colonists(3, PopSpecies.human))
    reassign_jobs(colony)

    assert calculate_production(colony).credits == 30


def test_pop_productivity_scales_output():
    skilled = _bare()
    skilled.base_jobs.append(Job.create(JobKind.farmer))
    skilled.pops.append(Pop.elite(5, PopSpecies.human))
    reassign_jobs(skilled)

    unskilled = _bare()
    unskilled.base_jobs.append(Job.create(JobKind.farmer))
    unskilled.pops.append(Pop.refugees(5, PopSpecies.human, None))
    reassign_jobs(unskilled)

    assert calculate_production(skilled).food > 50
    assert calculate_production(unskilled).food < 50


def test_pop_effects_raise_health_and_education():
    colony = _bare()
    pop = Pop.colonists(10, PopSpecies.human)
    colony.pops.append(pop)
    apply_pop_effects(colony, JobEffects(health_bonus=5, education_bonus=4))
    assert (pop.health, pop.education) == (85, 44)


# ---------------------------------------------------------------------------
# Food
# ---------------------------------------------------------------------------

def test_famine_without_farmers():
    colony = _founded(colonists=100, habitability=0)
    farmer = next(j for j in colony.base_jobs if j.kind == JobKind.farmer)
    remove_job(colony, farmer.id)

    result = process_turn(colony, 1)

    assert result.food_balance == -10
    assert ColonyEventType.famine in _event_types(result)


# ---------------------------------------------------------------------------
# Morale and stability
# ---------------------------------------------------------------------------

def test_morale_rules():
    colony = _bare(habitability=90)
    construct_building(colony, BuildingType.entertainment_complex)
    colony.morale = 50
    # habitable +1, no unemployment +1, entertainment +3
    assert update_morale(colony) == 55


def test_morale_drifts_toward_fifty():
    colony = _bare(habitability=60, morale=70)
    colony.pops.append(Pop.colonists(10, PopSpecies.human))
    colony.base_jobs.append(Job.create(JobKind.farmer, slots=8))
    reassign_jobs(colony)
    # drift −1, unemployment 20% neither bonus nor penalty
    assert update_morale(colony) == 69


def test_stability_rules():
    colony = _bare()
    construct_building(colony, BuildingType.garrison)
    colony.stability = 50
    colony.morale = 10
    colony.loyalty = 20
    # low morale −3, low loyalty −5, defense 2 → +1
    assert update_stability(colony) == 43


def test_job_effects_feed_stability():
    colony = _bare(stability=40)
    assert update_stability(colony, JobEffects(stability_bonus=6)) == 47


# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------

def test_forced_low_stability_causes_rebellion():
    colony = _founded()
    colony.stability = 5

    result = process_turn(colony, 1)

    assert colony.status == ColonyStatus.rebellion
    assert result.status == ColonyStatus.rebellion
    assert ColonyEventType.rebellion in _event_types(result)


def test_rebellion_is_sticky_until_suppressed():
    colony = _founded()
    colony.stability = 5
    process_turn(colony, 1)
    colony.stability = 90

    process_turn(colony, 2)
    assert colony.status == ColonyStatus.rebellion

    result = suppress_rebellion(colony)
    assert result.is_success
    assert colony.status == ColonyStatus.developing


def test_suppress_without_rebellion_fails():
    assert not suppress_rebellion(_founded()).is_success


def test_civil_unrest_raises_riot():
    colony = _founded()
    colony.stability = 15

    result = process_turn(colony, 1)

    assert colony.status == ColonyStatus.civil_unrest
    assert ColonyEventType.riot in _event_types(result)


def test_developing_until_ten_turns():
    colony = _founded()
    assert process_turn(colony, 9).status == ColonyStatus.developing
    assert process_turn(colony, 10).status == ColonyStatus.stable


def test_flourishing_with_infrastructure():
    colony = _founded()
    colony.infrastructure_level = 5
    assert process_turn(colony, 12).status == ColonyStatus.flourishing


def test_empty_colony_is_abandoned():
    colony = _founded()
    colony.pops.clear()
    colony.stability = 0

    result = process_turn(colony, 1)

    assert colony.status == ColonyStatus.abandoned
    assert ColonyEventType.rebellion not in _event_types(result)


@pytest.mark.parametrize(
    "population, expected",
    [
        (0, ColonyType.outpost),
        (49, ColonyType.outpost),
        (50, ColonyType.settlement),
        (200, ColonyType.colony),
        (999, ColonyType.province),
        (1000, ColonyType.major),
        (5000, ColonyType.metropolis),
    ],
)
def test_colony_type_bands(population, expected):
    assert classify_colony_type(population) == expected


def test_turn_reclassifies_type():
    colony = _founded(colonists=10)
    assert process_turn(colony, 1).colony_type == ColonyType.outpost


# ---------------------------------------------------------------------------
# Whole-turn invariants
# ---------------------------------------------------------------------------

def test_bounds_hold_over_many_turns():
    colony = _founded(colonists=40, habitability=45, max_population=120)
    colony.infrastructure_level = 4
    construct_building(colony, BuildingType.research_lab)
    construct_building(colony, BuildingType.garrison)
    colony.pops.append(
        Pop(size=30, species=PopSpecies.klingon, stratum=PopStratum.specialist, education=70)
    )

    for turn in range(1, 60):
        process_turn(colony, turn)
        assert 0 <= colony.morale <= 100
        assert 0 <= colony.stability <= 100
        assert 0 <= colony.loyalty <= 100
        assert 0 <= colony.total_population <= colony.max_population
        assert all(0 <= b.health <= 100 for b in colony.buildings)
        assert all(j.filled_slots <= j.total_slots for j in colony.jobs)
        assert colony.employed_population <= colony.total_population
        assert len(colony.recent_events) <= settings.recent_event_limit


def test_turn_sweeps_destroyed_buildings():
    colony = _founded()
    farm = construct_building(colony, BuildingType.farm).value
    farm.damage(100)

    process_turn(colony, 1)

    assert colony.buildings == []


# ---------------------------------------------------------------------------
# External interventions
# ---------------------------------------------------------------------------

def test_orbital_bombardment():
    colony = _founded(colonists=100)
    farm = construct_building(colony, BuildingType.farm).value
    morale, stability = colony.morale, colony.stability

    take_damage(colony, 30, is_orbital_bombardment=True)

    assert farm.health == 70
    assert colony.total_population == 90
    assert colony.morale == morale - 20
    assert colony.stability == stability - 15
    assert colony.infrastructure_level == 0


def test_ground_assault():
    colony = _founded()
    take_damage(colony, 100, is_orbital_bombardment=False)
    assert (colony.morale, colony.stability) == (50, 60)
    assert colony.total_population == 10


def test_conquest_occupies_colony():
    colony = _founded()
    new_owner = uuid.uuid4()
    change_owner(colony, new_owner, was_conquered=True)
    assert colony.owner_empire_id == new_owner
    assert colony.status == ColonyStatus.occupied
    assert (colony.loyalty, colony.morale, colony.stability) == (50, 30, 50)


def test_peaceful_transfer_keeps_status():
    colony = _founded()
    change_owner(colony, uuid.uuid4())
    assert colony.status == ColonyStatus.developing
    assert colony.loyalty == 100


def test_defense_info():
    colony = _founded()
    construct_building(colony, BuildingType.garrison)
    info = get_defense_info(colony)
    assert info.defense_level == 2
    assert info.garrison_strength == 100
    assert info.shield_strength == 0
    assert info.civilian_population == 10


def test_trade_income():
    colony = _founded(colonists=100)
    construct_building(colony, BuildingType.trade_hub)
    assert calculate_income(colony) == 51


def test_construction_on_abandoned_colony_fails():
    colony = _founded()
    colony.status = ColonyStatus.abandoned
    assert not colony_service.construct_building(colony, BuildingType.farm).is_success
