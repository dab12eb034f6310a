"""Random colony events, rolled from a deterministic per-(turn, colony) stream.

The generator is seeded from a SHA-256 digest of the turn number and the
colony id, never from process-wide random state, so re-simulating a turn
from the same prior state reproduces the same events on any machine.

Events, checked in this order each turn:
  disease               p = 0.02 × (1 + (100 − habitability)/100); morale −5 × severity(1-3)
  natural disaster      p = 0.01; one random standing building takes 30 damage
  cultural festival     p = 0.05 while morale > 60; morale +5
  scientific discovery  p = 0.03 while a research building stands; +50..149 research
"""

from __future__ import annotations

import hashlib
import logging
import random
import uuid

from colonysim.models.building import BuildingCategory
from colonysim.models.colony import Colony, ColonyEvent, ColonyEventType

logger = logging.getLogger(__name__)

DISEASE_BASE_CHANCE = 0.02
DISEASE_MORALE_PER_SEVERITY = 5
DISASTER_CHANCE = 0.01
DISASTER_DAMAGE = 30
FESTIVAL_CHANCE = 0.05
FESTIVAL_MORALE_THRESHOLD = 60
FESTIVAL_MORALE_BONUS = 5
DISCOVERY_CHANCE = 0.03


def event_seed(turn: int, colony_id: uuid.UUID) -> int:
    """Stable 64-bit seed for a colony's event stream on a given turn."""
    digest = hashlib.sha256(f"{turn}:{colony_id}".encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


def event_rng(turn: int, colony_id: uuid.UUID) -> random.Random:
    return random.Random(event_seed(turn, colony_id))


def roll_random_events(
    colony: Colony,
    turn: int,
    rng: random.Random | None = None,
) -> tuple[list[ColonyEvent], int]:
    """Roll this turn's random events and apply their effects to the colony.

    Returns (events, bonus_research).  ``rng`` defaults to the colony's own
    deterministic stream for the turn.
    """
    _rand = rng or event_rng(turn, colony.id)
    events: list[ColonyEvent] = []
    bonus_research = 0

    disease_chance = DISEASE_BASE_CHANCE * (1 + (100 - colony.habitability) / 100.0)
    if _rand.random() < disease_chance:
        severity = _rand.randint(1, 3)
        colony.morale = max(0, colony.morale - severity * DISEASE_MORALE_PER_SEVERITY)
        events.append(ColonyEvent(
            ColonyEventType.disease,
            "A disease outbreak affects the population.",
            turn,
        ))

    if _rand.random() < DISASTER_CHANCE:
        standing = [b for b in colony.buildings if not b.is_destroyed]
        if standing:
            damaged = standing[_rand.randrange(len(standing))]
            damaged.damage(DISASTER_DAMAGE)
            events.append(ColonyEvent(
                ColonyEventType.natural_disaster,
                f"Natural disaster damages {damaged.name}!",
                turn,
            ))

    if colony.morale > FESTIVAL_MORALE_THRESHOLD and _rand.random() < FESTIVAL_CHANCE:
        colony.morale = min(100, colony.morale + FESTIVAL_MORALE_BONUS)
        events.append(ColonyEvent(
            ColonyEventType.festival,
            "The colony celebrates with a cultural festival!",
            turn,
        ))

    has_research = any(
        b.category == BuildingCategory.research and not b.is_destroyed
        for b in colony.buildings
    )
    if has_research and _rand.random() < DISCOVERY_CHANCE:
        bonus_research = 50 + _rand.randrange(100)
        events.append(ColonyEvent(
            ColonyEventType.scientific_discovery,
            "Colonial scientists make an important discovery!",
            turn,
        ))

    if events:
        logger.debug(
            "Colony %s turn %s events: %s",
            colony.id, turn, [e.event_type.value for e in events],
        )
    return events, bonus_research
