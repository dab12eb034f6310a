import uuid
from typing import Optional

from pydantic import BaseModel, field_validator

from colonysim.models.building import BuildingCategory, BuildingType
from colonysim.models.colony import ColonyEventType, ColonyStatus, ColonyType
from colonysim.models.job import JobCategory, JobKind, ResourceType
from colonysim.models.pop import PopEthos, PopSpecies, PopStratum


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class ColonizeRequest(BaseModel):
    planet_id: uuid.UUID
    system_id: uuid.UUID
    name: str
    initial_colonists: int = 10
    species: PopSpecies = PopSpecies.human
    habitability: int
    max_population: int
    current_turn: int = 0

    @field_validator("habitability")
    @classmethod
    def validate_habitability(cls, v: int) -> int:
        if v < 0 or v > 100:
            raise ValueError("habitability must be between 0 and 100")
        return v

    @field_validator("max_population")
    @classmethod
    def validate_max_population(cls, v: int) -> int:
        if v < 0:
            raise ValueError("max_population cannot be negative")
        return v


class BuildRequest(BaseModel):
    building_type: BuildingType
    cost: Optional[int] = None


class MigrationRequest(BaseModel):
    source_colony_id: uuid.UUID
    destination_colony_id: uuid.UUID
    count: int
    forced: bool = False


class MigrationResponse(BaseModel):
    migrated: int


# ---------------------------------------------------------------------------
# Colony state
# ---------------------------------------------------------------------------

class PopTraitResponse(BaseModel):
    trait_id: str
    name: str

    model_config = {"from_attributes": True}


class PopResponse(BaseModel):
    id: uuid.UUID
    size: int
    species: PopSpecies
    stratum: PopStratum
    happiness: int
    education: int
    health: int
    ethos: PopEthos
    is_refugee: bool
    traits: list[PopTraitResponse] = []

    model_config = {"from_attributes": True}


class JobResponse(BaseModel):
    id: uuid.UUID
    kind: JobKind
    name: str
    category: JobCategory
    total_slots: int
    filled_slots: int
    output_type: ResourceType
    building_id: Optional[uuid.UUID]

    model_config = {"from_attributes": True}


class BuildingResponse(BaseModel):
    id: uuid.UUID
    building_type: BuildingType
    name: str
    category: BuildingCategory
    level: int
    max_level: int
    health: int
    is_active: bool
    construction_cost: int
    provided_jobs: list[JobResponse] = []

    model_config = {"from_attributes": True}


class ColonyEventResponse(BaseModel):
    event_type: ColonyEventType
    description: str
    turn: int

    model_config = {"from_attributes": True}


class ResourcesResponse(BaseModel):
    food_per_turn: int
    credits_per_turn: int
    dilithium_per_turn: int
    duranium_per_turn: int
    research_per_turn: int
    production_per_turn: int

    model_config = {"from_attributes": True}


class ColonySummaryResponse(BaseModel):
    id: uuid.UUID
    name: str
    system_id: uuid.UUID
    colony_type: ColonyType
    status: ColonyStatus
    total_population: int
    morale: int
    stability: int

    model_config = {"from_attributes": True}


class ColonyResponse(ColonySummaryResponse):
    planet_id: uuid.UUID
    owner_empire_id: uuid.UUID
    founded_on_turn: int
    age_in_turns: int
    habitability: int
    infrastructure_level: int
    defense_level: int
    loyalty: int
    max_population: int
    unemployed_population: int
    pops: list[PopResponse] = []
    base_jobs: list[JobResponse] = []
    buildings: list[BuildingResponse] = []
    resources: ResourcesResponse
    recent_events: list[ColonyEventResponse] = []


# ---------------------------------------------------------------------------
# Turn results
# ---------------------------------------------------------------------------

class ProductionResponse(BaseModel):
    credits: int
    dilithium: int
    duranium: int
    food: int
    research: int
    production: int

    model_config = {"from_attributes": True}


class ColonyTurnResultResponse(BaseModel):
    colony_id: uuid.UUID
    colony_name: str
    turn: int
    previous_population: int
    population_change: int
    unemployed: int
    production: ProductionResponse
    food_balance: int
    new_morale: int
    new_stability: int
    bonus_research: int
    maintenance_cost: int
    colony_type: ColonyType
    status: ColonyStatus
    events: list[ColonyEventResponse] = []

    model_config = {"from_attributes": True}


class EmpireTurnResponse(BaseModel):
    empire_id: uuid.UUID
    turn: int
    colony_results: list[ColonyTurnResultResponse] = []
    total_production: ProductionResponse
    total_research: int
    total_population: int
    average_morale: float
    average_stability: float
    rebellions: list[uuid.UUID] = []
    famines: list[uuid.UUID] = []
    abandoned: list[uuid.UUID] = []

    model_config = {"from_attributes": True}


class EconomicSummaryResponse(BaseModel):
    empire_id: uuid.UUID
    colony_count: int
    total_population: int
    total_production: ProductionResponse
    total_maintenance: int
    trade_income: int
    net_credits: int
    average_morale: float
    average_stability: float
    colonies_by_type: dict[ColonyType, int] = {}

    model_config = {"from_attributes": True}
