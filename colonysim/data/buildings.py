"""Static definitions for every building a colony can construct.

This table is the single source of truth for building stats: costs, build
time, level cap, the job bundle each building supplies, its per-level
bonuses and its construction prerequisites.  ``Building.create`` is a lookup
into it.

Prerequisites:
  - ``required_infrastructure_level``: minimum colony infrastructure level
  - ``required_building``: a building type the colony must already have
  - ``unique``: at most one per colony
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from colonysim.models.building import BuildingBonuses, BuildingCategory, BuildingType
from colonysim.models.job import JobKind


@dataclass(frozen=True)
class BuildingDefinition:
    building_type: BuildingType
    name: str
    description: str
    category: BuildingCategory
    base_build_cost: int
    base_maintenance_cost: int
    build_time: int                            # turns
    max_level: int
    jobs: tuple[tuple[JobKind, int], ...]      # (job kind, slots)
    bonuses: BuildingBonuses = field(default_factory=BuildingBonuses)
    required_infrastructure_level: int = 0
    required_building: BuildingType | None = None
    unique: bool = False


# ── RESOURCE ───────────────────────────────────────────────────────────────────

_RESOURCE_BUILDINGS: list[BuildingDefinition] = [
    BuildingDefinition(
        building_type=BuildingType.farm,
        name="Agricultural Complex",
        description="Large-scale farming facility using hydroponic and traditional methods.",
        category=BuildingCategory.resource,
        base_build_cost=100,
        base_maintenance_cost=10,
        build_time=3,
        max_level=5,
        jobs=((JobKind.farmer, 5),),
        bonuses=BuildingBonuses(food_bonus=0.2),
    ),
    BuildingDefinition(
        building_type=BuildingType.mine,
        name="Mining Complex",
        description="Deep-core mining facility for extracting minerals.",
        category=BuildingCategory.resource,
        base_build_cost=150,
        base_maintenance_cost=15,
        build_time=4,
        max_level=5,
        jobs=((JobKind.miner, 4),),
    ),
    BuildingDefinition(
        building_type=BuildingType.dilithium_refinery,
        name="Dilithium Refinery",
        description="Processes raw dilithium crystals for warp core use.",
        category=BuildingCategory.resource,
        base_build_cost=300,
        base_maintenance_cost=30,
        build_time=6,
        max_level=3,
        jobs=((JobKind.dilithium_miner, 3), (JobKind.engineer, 1)),
        required_infrastructure_level=2,
    ),
]

# ── PRODUCTION ─────────────────────────────────────────────────────────────────

_PRODUCTION_BUILDINGS: list[BuildingDefinition] = [
    BuildingDefinition(
        building_type=BuildingType.factory,
        name="Industrial Complex",
        description="Heavy manufacturing facility for producing goods and components.",
        category=BuildingCategory.production,
        base_build_cost=250,
        base_maintenance_cost=25,
        build_time=5,
        max_level=5,
        jobs=((JobKind.factory_worker, 6), (JobKind.engineer, 2)),
        bonuses=BuildingBonuses(production_bonus=0.15),
        required_infrastructure_level=2,
    ),
    BuildingDefinition(
        building_type=BuildingType.shipyard,
        name="Orbital Shipyard",
        description="Orbital facility for constructing and repairing starships.",
        category=BuildingCategory.production,
        base_build_cost=500,
        base_maintenance_cost=50,
        build_time=10,
        max_level=5,
        jobs=((JobKind.shipyard_worker, 5), (JobKind.engineer, 3)),
        bonuses=BuildingBonuses(production_bonus=0.1),
        required_infrastructure_level=3,
        required_building=BuildingType.factory,
    ),
]

# ── RESEARCH ───────────────────────────────────────────────────────────────────

_RESEARCH_BUILDINGS: list[BuildingDefinition] = [
    BuildingDefinition(
        building_type=BuildingType.research_lab,
        name="Research Laboratory",
        description="Scientific research facility for advancing technology.",
        category=BuildingCategory.research,
        base_build_cost=200,
        base_maintenance_cost=20,
        build_time=5,
        max_level=5,
        jobs=((JobKind.scientist, 3),),
        bonuses=BuildingBonuses(research_bonus=0.2),
        required_infrastructure_level=2,
    ),
    BuildingDefinition(
        building_type=BuildingType.science_academy,
        name="Science Academy",
        description="Premier research institution attracting the brightest minds.",
        category=BuildingCategory.research,
        base_build_cost=600,
        base_maintenance_cost=60,
        build_time=12,
        max_level=3,
        jobs=((JobKind.scientist, 4), (JobKind.lead_scientist, 2)),
        bonuses=BuildingBonuses(research_bonus=0.4),
        required_infrastructure_level=4,
        required_building=BuildingType.research_lab,
    ),
]

# ── COMMERCE ───────────────────────────────────────────────────────────────────

_COMMERCE_BUILDINGS: list[BuildingDefinition] = [
    BuildingDefinition(
        building_type=BuildingType.trading_post,
        name="Trading Post",
        description="Commercial hub for local and interstellar trade.",
        category=BuildingCategory.commerce,
        base_build_cost=150,
        base_maintenance_cost=15,
        build_time=4,
        max_level=5,
        jobs=((JobKind.merchant, 4),),
        bonuses=BuildingBonuses(credit_bonus=0.15),
    ),
    BuildingDefinition(
        building_type=BuildingType.bank,
        name="Financial Center",
        description="Major banking and investment institution.",
        category=BuildingCategory.commerce,
        base_build_cost=350,
        base_maintenance_cost=35,
        build_time=6,
        max_level=3,
        jobs=((JobKind.merchant, 2), (JobKind.banker, 2), (JobKind.administrator, 1)),
        bonuses=BuildingBonuses(credit_bonus=0.3),
        required_infrastructure_level=3,
        required_building=BuildingType.trading_post,
    ),
    BuildingDefinition(
        building_type=BuildingType.trade_hub,
        name="Trade Hub",
        description="Regional exchange drawing merchants from neighbouring systems.",
        category=BuildingCategory.commerce,
        base_build_cost=100,
        base_maintenance_cost=10,
        build_time=5,
        max_level=3,
        jobs=(),
    ),
]

# ── SERVICES ───────────────────────────────────────────────────────────────────

_SERVICE_BUILDINGS: list[BuildingDefinition] = [
    BuildingDefinition(
        building_type=BuildingType.hospital,
        name="Medical Center",
        description="Advanced healthcare facility improving population health.",
        category=BuildingCategory.services,
        base_build_cost=200,
        base_maintenance_cost=25,
        build_time=5,
        max_level=5,
        jobs=((JobKind.doctor, 2),),
        bonuses=BuildingBonuses(population_bonus=50, morale_bonus=5),
        required_infrastructure_level=2,
    ),
    BuildingDefinition(
        building_type=BuildingType.university,
        name="University",
        description="Higher education institution improving population education.",
        category=BuildingCategory.services,
        base_build_cost=250,
        base_maintenance_cost=30,
        build_time=6,
        max_level=3,
        jobs=((JobKind.teacher, 3), (JobKind.scientist, 1)),
        bonuses=BuildingBonuses(research_bonus=0.1),
        required_infrastructure_level=3,
    ),
    BuildingDefinition(
        building_type=BuildingType.entertainment_complex,
        name="Entertainment Complex",
        description="Recreation and entertainment facilities boosting morale.",
        category=BuildingCategory.services,
        base_build_cost=150,
        base_maintenance_cost=20,
        build_time=4,
        max_level=3,
        jobs=((JobKind.entertainer, 3),),
        bonuses=BuildingBonuses(morale_bonus=10),
    ),
]

# ── MILITARY ───────────────────────────────────────────────────────────────────

_MILITARY_BUILDINGS: list[BuildingDefinition] = [
    BuildingDefinition(
        building_type=BuildingType.garrison,
        name="Military Garrison",
        description="Ground forces base for planetary defense.",
        category=BuildingCategory.military,
        base_build_cost=200,
        base_maintenance_cost=30,
        build_time=5,
        max_level=5,
        jobs=((JobKind.security_officer, 3), (JobKind.starfleet_officer, 1)),
        bonuses=BuildingBonuses(defense_bonus=2, stability_bonus=5),
    ),
    BuildingDefinition(
        building_type=BuildingType.orbital_defense,
        name="Orbital Defense Platform",
        description="Space-based weapon platforms defending the colony.",
        category=BuildingCategory.military,
        base_build_cost=400,
        base_maintenance_cost=40,
        build_time=8,
        max_level=5,
        jobs=((JobKind.starfleet_officer, 2), (JobKind.engineer, 1)),
        bonuses=BuildingBonuses(defense_bonus=4),
        required_infrastructure_level=3,
        required_building=BuildingType.starport,
    ),
    BuildingDefinition(
        building_type=BuildingType.shield_generator,
        name="Planetary Shield Generator",
        description="Massive shield protecting the colony from orbital bombardment.",
        category=BuildingCategory.military,
        base_build_cost=800,
        base_maintenance_cost=80,
        build_time=15,
        max_level=3,
        jobs=((JobKind.engineer, 3),),
        bonuses=BuildingBonuses(defense_bonus=6),
        required_infrastructure_level=4,
        required_building=BuildingType.orbital_defense,
    ),
    BuildingDefinition(
        building_type=BuildingType.fortress_complex,
        name="Fortress Complex",
        description="Heavily fortified defensive position.",
        category=BuildingCategory.military,
        base_build_cost=500,
        base_maintenance_cost=50,
        build_time=10,
        max_level=5,
        jobs=((JobKind.security_officer, 4), (JobKind.starfleet_officer, 2)),
        bonuses=BuildingBonuses(defense_bonus=5, stability_bonus=10),
        required_infrastructure_level=3,
        required_building=BuildingType.garrison,
    ),
    BuildingDefinition(
        building_type=BuildingType.intelligence_center,
        name="Intelligence Center",
        description="Covert operations facility for espionage and counter-intelligence.",
        category=BuildingCategory.military,
        base_build_cost=400,
        base_maintenance_cost=40,
        build_time=8,
        max_level=3,
        jobs=((JobKind.intelligence_agent, 3),),
        bonuses=BuildingBonuses(stability_bonus=5),
        required_infrastructure_level=3,
    ),
]

# ── INFRASTRUCTURE & ADMINISTRATION ────────────────────────────────────────────

_INFRASTRUCTURE_BUILDINGS: list[BuildingDefinition] = [
    BuildingDefinition(
        building_type=BuildingType.starport,
        name="Starport",
        description="Major spaceport for interstellar travel and trade.",
        category=BuildingCategory.infrastructure,
        base_build_cost=300,
        base_maintenance_cost=30,
        build_time=8,
        max_level=5,
        jobs=((JobKind.administrator, 1), (JobKind.merchant, 2)),
        bonuses=BuildingBonuses(credit_bonus=0.1, population_bonus=100),
        required_infrastructure_level=2,
    ),
    BuildingDefinition(
        building_type=BuildingType.power_plant,
        name="Fusion Power Plant",
        description="Clean energy facility powering the colony.",
        category=BuildingCategory.infrastructure,
        base_build_cost=200,
        base_maintenance_cost=15,
        build_time=5,
        max_level=5,
        jobs=((JobKind.engineer, 2),),
        bonuses=BuildingBonuses(production_bonus=0.1),
    ),
    BuildingDefinition(
        building_type=BuildingType.housing,
        name="Housing District",
        description="Residential area increasing population capacity.",
        category=BuildingCategory.infrastructure,
        base_build_cost=100,
        base_maintenance_cost=10,
        build_time=3,
        max_level=10,
        jobs=(),
        bonuses=BuildingBonuses(population_bonus=200),
    ),
    BuildingDefinition(
        building_type=BuildingType.capitol,
        name="Capitol Complex",
        description="Seat of colonial government providing major bonuses.",
        category=BuildingCategory.administration,
        base_build_cost=1000,
        base_maintenance_cost=100,
        build_time=20,
        max_level=1,
        jobs=(
            (JobKind.governor, 1),
            (JobKind.administrator, 3),
            (JobKind.intelligence_agent, 1),
        ),
        bonuses=BuildingBonuses(
            credit_bonus=0.2,
            research_bonus=0.1,
            production_bonus=0.1,
            stability_bonus=20,
            morale_bonus=10,
            population_bonus=200,
        ),
        required_infrastructure_level=5,
        unique=True,
    ),
]

# ── MASTER REGISTRY ────────────────────────────────────────────────────────────

_ALL_BUILDINGS: dict[BuildingType, BuildingDefinition] = {
    definition.building_type: definition
    for definition in (
        _RESOURCE_BUILDINGS
        + _PRODUCTION_BUILDINGS
        + _RESEARCH_BUILDINGS
        + _COMMERCE_BUILDINGS
        + _SERVICE_BUILDINGS
        + _MILITARY_BUILDINGS
        + _INFRASTRUCTURE_BUILDINGS
    )
}


def get_building_definition(building_type: BuildingType) -> BuildingDefinition:
    """Return a BuildingDefinition or raise KeyError."""
    definition = _ALL_BUILDINGS.get(building_type)
    if definition is None:
        raise KeyError(f"Unknown building type: '{building_type}'")
    return definition


def list_building_definitions() -> list[BuildingDefinition]:
    return list(_ALL_BUILDINGS.values())


def list_buildings_by_category(category: BuildingCategory) -> list[BuildingDefinition]:
    return [d for d in _ALL_BUILDINGS.values() if d.category == category]


def check_prerequisites(
    definition: BuildingDefinition,
    infrastructure_level: int,
    existing_types: Iterable[BuildingType],
) -> str | None:
    """Return the reason construction is blocked, or None if it is allowed.

    Pure function of the colony's infrastructure level and the building
    types it already has.
    """
    existing = set(existing_types)
    if infrastructure_level < definition.required_infrastructure_level:
        return (
            f"{definition.name} requires infrastructure level "
            f"{definition.required_infrastructure_level}, colony has {infrastructure_level}"
        )
    if definition.required_building is not None and definition.required_building not in existing:
        required = get_building_definition(definition.required_building)
        return f"{definition.name} requires an existing {required.name}"
    if definition.unique and definition.building_type in existing:
        return f"Only one {definition.name} may exist per colony"
    return None


def can_build(
    building_type: BuildingType,
    infrastructure_level: int,
    existing_types: Iterable[BuildingType],
) -> bool:
    definition = get_building_definition(building_type)
    return check_prerequisites(definition, infrastructure_level, existing_types) is None
