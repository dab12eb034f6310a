"""Greedy matching of pops onto job slots.

Assignment is recomputed from scratch whenever it runs:
  1. Every job (including those of inactive buildings) is cleared.
  2. Pops are ranked by education, then happiness, best first.
  3. Workable jobs are ranked by priority, then base output, highest first.
  4. Each job in turn takes workers from the best remaining pop until it is
     full or the pool is empty.  A pop only partly consumed keeps its
     remainder available for the next job.

Sorting is stable, so pops or jobs that tie keep their colony order and an
unchanged colony always gets the same assignment.
"""

from __future__ import annotations

from colonysim.models.colony import Colony
from colonysim.models.job import Job
from colonysim.models.pop import Pop

# Unemployment above this share of the population costs stability and morale
UNEMPLOYMENT_PENALTY_THRESHOLD = 0.2
UNEMPLOYMENT_STABILITY_PENALTY = 5
UNEMPLOYMENT_MORALE_PENALTY = 3


def rank_pops(pops: list[Pop]) -> list[Pop]:
    return sorted(
        (p for p in pops if p.size > 0),
        key=lambda p: (p.education, p.happiness),
        reverse=True,
    )


def rank_jobs(jobs: list[Job]) -> list[Job]:
    return sorted(jobs, key=lambda j: (j.priority, j.base_output), reverse=True)


def reassign_jobs(colony: Colony) -> int:
    """Reassign every pop in the colony to jobs.  Returns the unemployed count."""
    for job in colony.jobs:
        job.clear_workers()

    pool = rank_pops(colony.pops)
    remaining = {pop.id: pop.size for pop in pool}

    for job in rank_jobs(colony.available_jobs):
        while job.available_slots > 0 and pool:
            pop = pool[0]
            taken = job.assign_workers(pop.id, remaining[pop.id])
            remaining[pop.id] -= taken
            if remaining[pop.id] <= 0:
                pool.pop(0)

    return sum(remaining[pop.id] for pop in pool)


def apply_unemployment_penalty(colony: Colony, unemployed: int) -> bool:
    """Apply the immediate stability/morale hit for heavy unemployment.

    Returns True if the penalty was applied.
    """
    if unemployed <= colony.total_population * UNEMPLOYMENT_PENALTY_THRESHOLD:
        return False
    colony.stability = max(0, colony.stability - UNEMPLOYMENT_STABILITY_PENALTY)
    colony.morale = max(0, colony.morale - UNEMPLOYMENT_MORALE_PENALTY)
    return True


def worker_productivity(colony: Colony, job: Job) -> float:
    """Worker-weighted average productivity of the pops assigned to a job."""
    filled = job.filled_slots
    if filled == 0:
        return 1.0
    weighted = 0.0
    for pop_id, count in job.assigned_workers.items():
        pop = colony.get_pop(pop_id)
        modifier = pop.get_productivity_modifier() if pop is not None else 1.0
        weighted += modifier * count
    return weighted / filled
