"""Tests for buildings and construction.

Covers:
- Building.create wires catalog jobs to the building id
- Health lifecycle: inactive below 50, destroyed at 0, repair cannot revive
- Level upgrades and scaled bonuses (1 + (level − 1) × 0.5)
- Maintenance and upgrade costs scale with level
- Prerequisites: infrastructure level, required building, unique buildings
- construct_building: typed failures leave the colony untouched
- Flat morale/stability bonuses granted once; population/defense bonuses derived
- Destroyed buildings contribute no jobs or bonuses and are swept
- Upgrade/repair/destroy by id, including unknown ids
"""

import uuid

import pytest

from colonysim.data.buildings import (
    can_build,
    check_prerequisites,
    get_building_definition,
    list_building_definitions,
    list_buildings_by_category,
)
from colonysim.models.building import Building, BuildingBonuses, BuildingCategory, BuildingType
from colonysim.models.colony import Colony
from colonysim.models.job import JobKind
from colonysim.services.colony_service import (
    construct_building,
    destroy_building,
    develop_infrastructure,
    remove_destroyed_buildings,
    repair_building,
    upgrade_building,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _colony(infrastructure_level: int = 0) -> Colony:
    return Colony(
        name="Forge",
        planet_id=uuid.uuid4(),
        system_id=uuid.uuid4(),
        owner_empire_id=uuid.uuid4(),
        habitability=70,
        base_max_population=500,
        infrastructure_level=infrastructure_level,
    )


# ---------------------------------------------------------------------------
# Building model
# ---------------------------------------------------------------------------

def test_create_builds_jobs_owned_by_building():
    building = Building.create(BuildingType.bank)
    kinds = [(j.kind, j.total_slots) for j in building.provided_jobs]
    assert kinds == [(JobKind.merchant, 2), (JobKind.banker, 2), (JobKind.administrator, 1)]
    assert all(j.building_id == building.id for j in building.provided_jobs)
    assert building.construction_cost == get_building_definition(BuildingType.bank).base_build_cost


def test_damage_below_threshold_deactivates():
    building = Building.create(BuildingType.farm)
    building.damage(60)
    assert building.health == 40
    assert not building.is_active
    assert not building.is_destroyed


def test_repair_reactivates_at_threshold():
    building = Building.create(BuildingType.farm)
    building.damage(60)
    building.repair(10)
    assert building.health == 50
    assert building.is_active


def test_repair_caps_at_max_health():
    building = Building.create(BuildingType.farm)
    building.damage(10)
    building.repair(500)
    assert building.health == 100


def test_destroyed_building_cannot_be_repaired():
    building = Building.create(BuildingType.farm)
    building.damage(500)
    assert building.health == 0
    assert building.is_destroyed
    building.repair(100)
    assert building.health == 0
    assert building.get_scaled_bonuses() == BuildingBonuses()


def test_activate_respects_health():
    building = Building.create(BuildingType.farm)
    building.damage(70)
    building.activate()
    assert not building.is_active


def test_upgrade_stops_at_max_level():
    building = Building.create(BuildingType.garrison)
    while building.upgrade():
        pass
    assert building.level == building.max_level
    assert not building.upgrade()


def test_downgrade_stops_at_level_one():
    building = Building.create(BuildingType.farm)
    assert not building.downgrade()
    building.upgrade()
    assert building.downgrade()
    assert building.level == 1


def test_scaled_bonuses_follow_level():
    building = Building.create(BuildingType.garrison)
    building.upgrade()
    building.upgrade()
    assert building.get_level_multiplier() == pytest.approx(2.0)
    bonuses = building.get_scaled_bonuses()
    assert bonuses.defense_bonus == 4
    assert bonuses.stability_bonus == 10


def test_costs_scale_with_level():
    building = Building.create(BuildingType.factory)
    building.upgrade()
    definition = get_building_definition(BuildingType.factory)
    assert building.get_maintenance_cost() == definition.base_maintenance_cost * 2
    assert building.get_upgrade_cost() == definition.base_build_cost * 2


# ---------------------------------------------------------------------------
# Catalog and prerequisites
# ---------------------------------------------------------------------------

def test_catalog_covers_every_type():
    assert {d.building_type for d in list_building_definitions()} == set(BuildingType)


def test_list_by_category():
    research = list_buildings_by_category(BuildingCategory.research)
    assert {d.building_type for d in research} == {
        BuildingType.research_lab,
        BuildingType.science_academy,
    }


def test_prerequisite_infrastructure_level():
    definition = get_building_definition(BuildingType.research_lab)
    assert check_prerequisites(definition, 1, []) is not None
    assert check_prerequisites(definition, 2, []) is None


def test_prerequisite_required_building():
    assert not can_build(BuildingType.shipyard, 5, [])
    assert can_build(BuildingType.shipyard, 5, [BuildingType.factory])


def test_unique_building():
    assert can_build(BuildingType.capitol, 5, [])
    assert not can_build(BuildingType.capitol, 5, [BuildingType.capitol])


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def test_construct_adds_building_and_jobs():
    colony = _colony()
    result = construct_building(colony, BuildingType.farm)
    assert result.is_success
    assert colony.buildings == [result.value]
    assert any(j.building_id == result.value.id for j in colony.jobs)


def test_construct_with_explicit_cost():
    colony = _colony()
    result = construct_building(colony, BuildingType.farm, cost=42)
    assert result.value.construction_cost == 42


def test_construct_failure_leaves_colony_unchanged():
    colony = _colony(infrastructure_level=1)
    result = construct_building(colony, BuildingType.research_lab)
    assert not result.is_success
    assert "infrastructure" in result.error
    assert colony.buildings == []


def test_construct_requires_existing_building():
    colony = _colony(infrastructure_level=5)
    result = construct_building(colony, BuildingType.science_academy)
    assert not result.is_success
    assert "Research Laboratory" in result.error


def test_flat_bonuses_granted_once_at_construction():
    colony = _colony()
    construct_building(colony, BuildingType.garrison)
    assert colony.stability == 55
    assert colony.defense_level == 2


def test_population_bonus_is_derived():
    colony = _colony(infrastructure_level=2)
    construct_building(colony, BuildingType.hospital)
    assert colony.max_population == 550
    assert colony.morale == 55


def test_destroyed_building_loses_jobs_and_bonuses():
    colony = _colony()
    building = construct_building(colony, BuildingType.housing).value
    assert colony.max_population == 700

    building.damage(100)

    assert colony.max_population == 500
    assert all(j.building_id != building.id for j in colony.jobs)
    removed = remove_destroyed_buildings(colony)
    assert removed == [building]
    assert colony.buildings == []


def test_inactive_building_jobs_are_not_available():
    colony = _colony()
    farm = construct_building(colony, BuildingType.farm).value
    farm.damage(60)
    assert all(j.building_id != farm.id for j in colony.available_jobs)
    assert any(j.building_id == farm.id for j in colony.jobs)


def test_upgrade_building_by_id():
    colony = _colony()
    farm = construct_building(colony, BuildingType.farm).value
    assert upgrade_building(colony, farm.id).is_success
    assert farm.level == 2


def test_upgrade_building_at_max_level_fails():
    colony = _colony(infrastructure_level=5)
    capitol = construct_building(colony, BuildingType.capitol).value
    result = upgrade_building(colony, capitol.id)
    assert not result.is_success
    assert capitol.level == 1


def test_repair_and_destroy_by_id():
    colony = _colony()
    farm = construct_building(colony, BuildingType.farm).value
    farm.damage(60)
    assert repair_building(colony, farm.id, 20).is_success
    assert farm.is_active

    assert destroy_building(colony, farm.id).is_success
    assert colony.buildings == []


def test_unknown_building_id_is_not_found():
    colony = _colony()
    missing = uuid.uuid4()
    for result in (
        upgrade_building(colony, missing),
        repair_building(colony, missing, 10),
        destroy_building(colony, missing),
    ):
        assert not result.is_success
        assert "not found" in result.error


def test_develop_infrastructure_is_capped():
    colony = _colony(infrastructure_level=9)
    assert develop_infrastructure(colony, 5) == 10
