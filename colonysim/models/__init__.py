from colonysim.models.building import Building, BuildingBonuses, BuildingCategory, BuildingType  # noqa: F401
from colonysim.models.colony import (  # noqa: F401
    Colony,
    ColonyEvent,
    ColonyEventType,
    ColonyProduction,
    ColonyStatus,
    ColonyTurnResult,
    ColonyType,
)
from colonysim.models.job import Job, JobCategory, JobEffects, JobKind, JobOutput, ResourceType  # noqa: F401
from colonysim.models.pop import Pop, PopEthos, PopSpecies, PopStratum  # noqa: F401
