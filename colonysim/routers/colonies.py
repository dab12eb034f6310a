import uuid

from fastapi import APIRouter, Depends, HTTPException, status

from colonysim.dependencies import EmpireRegistry, get_registry
from colonysim.schemas.colony import (
    BuildingResponse,
    BuildRequest,
    ColonizeRequest,
    ColonyResponse,
    ColonySummaryResponse,
    EconomicSummaryResponse,
    EmpireTurnResponse,
    MigrationRequest,
    MigrationResponse,
)
from colonysim.services.colony_manager import ColonyManager

router = APIRouter(prefix="/empires", tags=["colonies"])


def _get_manager_or_404(registry: EmpireRegistry, empire_id: uuid.UUID) -> ColonyManager:
    manager = registry.get(empire_id)
    if manager is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Empire not found")
    return manager


@router.post(
    "/{empire_id}/colonies",
    response_model=ColonyResponse,
    status_code=status.HTTP_201_CREATED,
)
def colonize(
    empire_id: uuid.UUID,
    body: ColonizeRequest,
    registry: EmpireRegistry = Depends(get_registry),
):
    manager = registry.get_or_create(empire_id)
    result = manager.colonize(
        planet_id=body.planet_id,
        system_id=body.system_id,
        name=body.name,
        initial_colonists=body.initial_colonists,
        species=body.species,
        habitability=body.habitability,
        max_population=body.max_population,
        current_turn=body.current_turn,
    )
    if not result.is_success:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)
    return ColonyResponse.model_validate(result.value)


@router.get("/{empire_id}/colonies", response_model=list[ColonySummaryResponse])
def list_colonies(
    empire_id: uuid.UUID,
    registry: EmpireRegistry = Depends(get_registry),
):
    manager = _get_manager_or_404(registry, empire_id)
    return [ColonySummaryResponse.model_validate(c) for c in manager.colonies]


@router.get("/{empire_id}/colonies/{colony_id}", response_model=ColonyResponse)
def get_colony(
    empire_id: uuid.UUID,
    colony_id: uuid.UUID,
    registry: EmpireRegistry = Depends(get_registry),
):
    manager = _get_manager_or_404(registry, empire_id)
    colony = manager.get_colony(colony_id)
    if colony is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Colony not found")
    return ColonyResponse.model_validate(colony)


@router.post(
    "/{empire_id}/colonies/{colony_id}/buildings",
    response_model=BuildingResponse,
    status_code=status.HTTP_201_CREATED,
)
def construct_building(
    empire_id: uuid.UUID,
    colony_id: uuid.UUID,
    body: BuildRequest,
    registry: EmpireRegistry = Depends(get_registry),
):
    manager = _get_manager_or_404(registry, empire_id)
    if manager.get_colony(colony_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Colony not found")

    result = manager.construct_building(colony_id, body.building_type, body.cost)
    if not result.is_success:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)
    return BuildingResponse.model_validate(result.value)


@router.post("/{empire_id}/migrations", response_model=MigrationResponse)
def migrate_pops(
    empire_id: uuid.UUID,
    body: MigrationRequest,
    registry: EmpireRegistry = Depends(get_registry),
):
    manager = _get_manager_or_404(registry, empire_id)
    for colony_id in (body.source_colony_id, body.destination_colony_id):
        if manager.get_colony(colony_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Colony not found")

    result = manager.migrate_pops(
        body.source_colony_id, body.destination_colony_id, body.count, forced=body.forced
    )
    if not result.is_success:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)
    return MigrationResponse(migrated=result.value)


@router.post("/{empire_id}/turns/{turn}", response_model=EmpireTurnResponse)
def process_turn(
    empire_id: uuid.UUID,
    turn: int,
    registry: EmpireRegistry = Depends(get_registry),
):
    """Resolve one turn for every colony of the empire."""
    manager = _get_manager_or_404(registry, empire_id)
    return EmpireTurnResponse.model_validate(manager.process_all_colonies(turn))


@router.get("/{empire_id}/summary", response_model=EconomicSummaryResponse)
def economic_summary(
    empire_id: uuid.UUID,
    registry: EmpireRegistry = Depends(get_registry),
):
    manager = _get_manager_or_404(registry, empire_id)
    return EconomicSummaryResponse.model_validate(manager.get_economic_summary())
