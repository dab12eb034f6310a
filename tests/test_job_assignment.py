"""Tests for job assignment.

Covers:
- Best-educated pops fill the highest-priority jobs first
- A partly used pop keeps its remainder for the next job
- Filled slots never exceed job capacity or colony population
- Zero-size pops are skipped
- Inactive buildings' jobs take no workers
- Reassignment is deterministic for an unchanged colony
- Unemployment penalty above 20% of population
- Worker-weighted productivity of a job
"""

import uuid

import pytest

from colonysim.models.building import Building, BuildingType
from colonysim.models.colony import Colony
from colonysim.models.job import Job, JobKind
from colonysim.models.pop import Pop, PopSpecies, PopStratum
from colonysim.services.job_assignment import (
    apply_unemployment_penalty,
    rank_jobs,
    rank_pops,
    reassign_jobs,
    worker_productivity,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _colony(*jobs: Job) -> Colony:
    colony = Colony(
        name="Workshop",
        planet_id=uuid.uuid4(),
        system_id=uuid.uuid4(),
        owner_empire_id=uuid.uuid4(),
        habitability=80,
        base_max_population=1000,
    )
    colony.base_jobs.extend(jobs)
    return colony


def _assert_capacity_invariants(colony: Colony) -> None:
    for job in colony.jobs:
        assert job.filled_slots <= job.total_slots
    assert colony.employed_population <= colony.total_population


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------

def test_rank_pops_by_education_then_happiness():
    low = Pop(size=5, species=PopSpecies.human, education=20, happiness=90)
    high = Pop(size=5, species=PopSpecies.human, education=60, happiness=10)
    tie_happier = Pop(size=5, species=PopSpecies.human, education=20, happiness=95)
    empty = Pop(size=0, species=PopSpecies.human, education=100)
    assert rank_pops([low, high, tie_happier, empty]) == [high, tie_happier, low]


def test_rank_jobs_by_priority_then_output():
    miner = Job.create(JobKind.miner)
    farmer = Job.create(JobKind.farmer)
    scientist = Job.create(JobKind.scientist)
    assert rank_jobs([scientist, miner, farmer]) == [farmer, miner, scientist]


# ---------------------------------------------------------------------------
# Reassignment
# ---------------------------------------------------------------------------

def test_best_educated_pop_takes_highest_priority_job():
    farmer = Job.create(JobKind.farmer, slots=5)
    miner = Job.create(JobKind.miner, slots=5)
    colony = _colony(miner, farmer)
    educated = Pop(size=5, species=PopSpecies.human, education=80)
    uneducated = Pop(size=5, species=PopSpecies.human, education=10)
    colony.pops.extend([uneducated, educated])

    unemployed = reassign_jobs(colony)

    assert unemployed == 0
    assert farmer.assigned_workers == {educated.id: 5}
    assert miner.assigned_workers == {uneducated.id: 5}


def test_partly_used_pop_is_not_over_assigned():
    farmer = Job.create(JobKind.farmer, slots=5)
    miner = Job.create(JobKind.miner, slots=3)
    colony = _colony(farmer, miner)
    colony.pops.append(Pop.colonists(3, PopSpecies.human))

    unemployed = reassign_jobs(colony)

    assert unemployed == 0
    assert farmer.filled_slots == 3
    assert miner.filled_slots == 0
    _assert_capacity_invariants(colony)


def test_pop_remainder_flows_to_next_job():
    farmer = Job.create(JobKind.farmer, slots=5)
    miner = Job.create(JobKind.miner, slots=3)
    colony = _colony(farmer, miner)
    pop = Pop.colonists(7, PopSpecies.human)
    colony.pops.append(pop)

    assert reassign_jobs(colony) == 0
    assert farmer.assigned_workers == {pop.id: 5}
    assert miner.assigned_workers == {pop.id: 2}


def test_surplus_population_is_unemployed():
    colony = _colony(Job.create(JobKind.farmer, slots=5))
    colony.pops.append(Pop.colonists(12, PopSpecies.human))

    assert reassign_jobs(colony) == 7
    assert colony.unemployed_population == 7
    assert colony.unemployment_rate == pytest.approx(7 / 12)
    _assert_capacity_invariants(colony)


def test_zero_size_pops_are_skipped():
    farmer = Job.create(JobKind.farmer, slots=5)
    colony = _colony(farmer)
    colony.pops.append(Pop(size=0, species=PopSpecies.human, education=100))

    assert reassign_jobs(colony) == 0
    assert farmer.filled_slots == 0


def test_reassignment_clears_previous_assignment():
    farmer = Job.create(JobKind.farmer, slots=5)
    colony = _colony(farmer)
    pop = Pop.colonists(5, PopSpecies.human)
    colony.pops.append(pop)
    reassign_jobs(colony)

    pop.size = 2
    reassign_jobs(colony)

    assert farmer.assigned_workers == {pop.id: 2}


def test_inactive_building_jobs_take_no_workers():
    colony = _colony()
    farm = Building.create(BuildingType.farm)
    farm.damage(60)
    colony.buildings.append(farm)
    colony.pops.append(Pop.colonists(5, PopSpecies.human))

    assert reassign_jobs(colony) == 5
    assert all(j.filled_slots == 0 for j in farm.provided_jobs)


def test_reassignment_is_deterministic():
    colony = _colony(
        Job.create(JobKind.farmer, slots=3),
        Job.create(JobKind.miner, slots=3),
        Job.create(JobKind.scientist, slots=3),
    )
    colony.pops.extend([
        Pop.colonists(4, PopSpecies.human),
        Pop(size=4, species=PopSpecies.vulcan, stratum=PopStratum.specialist, education=70),
    ])

    reassign_jobs(colony)
    first = [dict(j.assigned_workers) for j in colony.jobs]
    reassign_jobs(colony)
    second = [dict(j.assigned_workers) for j in colony.jobs]

    assert first == second


# ---------------------------------------------------------------------------
# Unemployment penalty
# ---------------------------------------------------------------------------

def test_unemployment_penalty_applies_above_threshold():
    colony = _colony(Job.create(JobKind.farmer, slots=1))
    colony.pops.append(Pop.colonists(10, PopSpecies.human))
    unemployed = reassign_jobs(colony)

    assert apply_unemployment_penalty(colony, unemployed)
    assert colony.stability == 45
    assert colony.morale == 47


def test_no_penalty_at_threshold():
    colony = _colony(Job.create(JobKind.farmer, slots=8))
    colony.pops.append(Pop.colonists(10, PopSpecies.human))
    unemployed = reassign_jobs(colony)

    assert unemployed == 2
    assert not apply_unemployment_penalty(colony, unemployed)
    assert colony.stability == 50


# ---------------------------------------------------------------------------
# Worker productivity
# ---------------------------------------------------------------------------

def test_worker_productivity_is_weighted_by_workers():
    farmer = Job.create(JobKind.farmer, slots=4)
    colony = _colony(farmer)
    elite = Pop.elite(2, PopSpecies.human)
    refugees = Pop.refugees(2, PopSpecies.human, None)
    colony.pops.extend([elite, refugees])
    reassign_jobs(colony)

    expected = (
        elite.get_productivity_modifier() * 2 + refugees.get_productivity_modifier() * 2
    ) / 4
    assert worker_productivity(colony, farmer) == pytest.approx(expected)


def test_worker_productivity_of_empty_job_is_neutral():
    farmer = Job.create(JobKind.farmer)
    assert worker_productivity(_colony(farmer), farmer) == 1.0
