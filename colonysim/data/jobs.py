"""Static definitions for every job kind a colony or building can offer.

Priority decides fill order during job assignment (higher first).  Jobs with
a base output of 0 produce no resources; their value lies in the special
effects computed by ``Job.get_special_effects``.
"""

from dataclasses import dataclass

from colonysim.models.job import JobCategory, JobKind, ResourceType
from colonysim.models.pop import PopStratum


@dataclass(frozen=True)
class JobDefinition:
    kind: JobKind
    name: str
    description: str
    category: JobCategory
    default_slots: int
    minimum_stratum: PopStratum
    minimum_education: int
    base_output: int
    output_type: ResourceType
    priority: int


_JOB_DEFINITIONS: list[JobDefinition] = [
    JobDefinition(
        kind=JobKind.farmer,
        name="Farmer",
        description="Produces food to feed the colony population.",
        category=JobCategory.agriculture,
        default_slots=5,
        minimum_stratum=PopStratum.worker,
        minimum_education=10,
        base_output=10,
        output_type=ResourceType.food,
        priority=100,
    ),
    JobDefinition(
        kind=JobKind.miner,
        name="Miner",
        description="Extracts minerals and raw materials.",
        category=JobCategory.extraction,
        default_slots=3,
        minimum_stratum=PopStratum.worker,
        minimum_education=10,
        base_output=8,
        output_type=ResourceType.duranium,
        priority=80,
    ),
    JobDefinition(
        kind=JobKind.dilithium_miner,
        name="Dilithium Miner",
        description="Extracts valuable dilithium crystals.",
        category=JobCategory.extraction,
        default_slots=2,
        minimum_stratum=PopStratum.worker,
        minimum_education=20,
        base_output=5,
        output_type=ResourceType.dilithium,
        priority=90,
    ),
    JobDefinition(
        kind=JobKind.factory_worker,
        name="Factory Worker",
        description="Produces manufactured goods and ship components.",
        category=JobCategory.manufacturing,
        default_slots=5,
        minimum_stratum=PopStratum.worker,
        minimum_education=25,
        base_output=12,
        output_type=ResourceType.production,
        priority=70,
    ),
    JobDefinition(
        kind=JobKind.engineer,
        name="Engineer",
        description="Skilled technician who maintains and builds infrastructure.",
        category=JobCategory.technical,
        default_slots=2,
        minimum_stratum=PopStratum.specialist,
        minimum_education=50,
        base_output=15,
        output_type=ResourceType.production,
        priority=60,
    ),
    JobDefinition(
        kind=JobKind.scientist,
        name="Scientist",
        description="Conducts research and develops new technologies.",
        category=JobCategory.research,
        default_slots=2,
        minimum_stratum=PopStratum.specialist,
        minimum_education=60,
        base_output=10,
        output_type=ResourceType.research,
        priority=50,
    ),
    JobDefinition(
        kind=JobKind.lead_scientist,
        name="Lead Scientist",
        description="Directs research programs and makes breakthroughs.",
        category=JobCategory.research,
        default_slots=1,
        minimum_stratum=PopStratum.elite,
        minimum_education=80,
        base_output=25,
        output_type=ResourceType.research,
        priority=40,
    ),
    JobDefinition(
        kind=JobKind.administrator,
        name="Administrator",
        description="Manages colony affairs and improves efficiency.",
        category=JobCategory.administration,
        default_slots=1,
        minimum_stratum=PopStratum.specialist,
        minimum_education=50,
        base_output=15,
        output_type=ResourceType.credits,
        priority=85,
    ),
    JobDefinition(
        kind=JobKind.governor,
        name="Governor",
        description="Colonial leader who provides bonuses to all production.",
        category=JobCategory.leadership,
        default_slots=1,
        minimum_stratum=PopStratum.elite,
        minimum_education=70,
        base_output=0,
        output_type=ResourceType.credits,
        priority=95,
    ),
    JobDefinition(
        kind=JobKind.merchant,
        name="Merchant",
        description="Conducts trade and generates credits.",
        category=JobCategory.commerce,
        default_slots=3,
        minimum_stratum=PopStratum.worker,
        minimum_education=30,
        base_output=20,
        output_type=ResourceType.credits,
        priority=55,
    ),
    JobDefinition(
        kind=JobKind.banker,
        name="Banker",
        description="Manages finances and investments.",
        category=JobCategory.commerce,
        default_slots=1,
        minimum_stratum=PopStratum.specialist,
        minimum_education=60,
        base_output=40,
        output_type=ResourceType.credits,
        priority=45,
    ),
    JobDefinition(
        kind=JobKind.security_officer,
        name="Security Officer",
        description="Maintains order and provides defense.",
        category=JobCategory.security,
        default_slots=2,
        minimum_stratum=PopStratum.worker,
        minimum_education=30,
        base_output=0,
        output_type=ResourceType.credits,
        priority=75,
    ),
    JobDefinition(
        kind=JobKind.intelligence_agent,
        name="Intelligence Agent",
        description="Gathers information and counters espionage.",
        category=JobCategory.security,
        default_slots=1,
        minimum_stratum=PopStratum.specialist,
        minimum_education=60,
        base_output=0,
        output_type=ResourceType.credits,
        priority=35,
    ),
    JobDefinition(
        kind=JobKind.entertainer,
        name="Entertainer",
        description="Provides entertainment and boosts morale.",
        category=JobCategory.services,
        default_slots=2,
        minimum_stratum=PopStratum.worker,
        minimum_education=20,
        base_output=0,
        output_type=ResourceType.credits,
        priority=30,
    ),
    JobDefinition(
        kind=JobKind.doctor,
        name="Doctor",
        description="Provides healthcare and reduces mortality.",
        category=JobCategory.services,
        default_slots=1,
        minimum_stratum=PopStratum.specialist,
        minimum_education=70,
        base_output=0,
        output_type=ResourceType.credits,
        priority=65,
    ),
    JobDefinition(
        kind=JobKind.teacher,
        name="Teacher",
        description="Educates the population, improving future workers.",
        category=JobCategory.services,
        default_slots=2,
        minimum_stratum=PopStratum.specialist,
        minimum_education=50,
        base_output=0,
        output_type=ResourceType.research,
        priority=50,
    ),
    JobDefinition(
        kind=JobKind.starfleet_officer,
        name="Starfleet Officer",
        description="Professional military personnel.",
        category=JobCategory.military,
        default_slots=1,
        minimum_stratum=PopStratum.specialist,
        minimum_education=60,
        base_output=0,
        output_type=ResourceType.credits,
        priority=70,
    ),
    JobDefinition(
        kind=JobKind.shipyard_worker,
        name="Shipyard Worker",
        description="Constructs and repairs starships.",
        category=JobCategory.manufacturing,
        default_slots=4,
        minimum_stratum=PopStratum.worker,
        minimum_education=40,
        base_output=20,
        output_type=ResourceType.production,
        priority=65,
    ),
]

_ALL_JOBS: dict[JobKind, JobDefinition] = {d.kind: d for d in _JOB_DEFINITIONS}


def get_job_definition(kind: JobKind) -> JobDefinition:
    """Return a JobDefinition or raise KeyError."""
    definition = _ALL_JOBS.get(kind)
    if definition is None:
        raise KeyError(f"Unknown job kind: '{kind}'")
    return definition


def list_job_definitions() -> list[JobDefinition]:
    return list(_ALL_JOBS.values())
