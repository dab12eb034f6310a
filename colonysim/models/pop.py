"""Pop model — a group of inhabitants sharing species, stratum and living standards.

A pop is owned by exactly one colony.  Jobs refer to it only through its id.
All getters are pure functions of the pop's current state; the only mutations
are the explicit methods below, each clamping its attribute to 0-100.
"""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field

from colonysim.data.traits import PopTrait


class PopSpecies(str, enum.Enum):
    human = "human"
    vulcan = "vulcan"
    klingon = "klingon"
    romulan = "romulan"
    cardassian = "cardassian"
    ferengi = "ferengi"
    bajoran = "bajoran"
    trill = "trill"
    betazoid = "betazoid"
    andorian = "andorian"
    tellarite = "tellarite"
    bolian = "bolian"
    breen = "breen"
    jem_hadar = "jem_hadar"
    vorta = "vorta"
    borg_drone = "borg_drone"
    other = "other"


class PopStratum(str, enum.Enum):
    underclass = "underclass"
    worker = "worker"
    specialist = "specialist"
    elite = "elite"

    @property
    def rank(self) -> int:
        return _STRATUM_ORDER.index(self)


_STRATUM_ORDER: list[PopStratum] = [
    PopStratum.underclass,
    PopStratum.worker,
    PopStratum.specialist,
    PopStratum.elite,
]


class PopEthos(str, enum.Enum):
    establishment = "establishment"
    neutral = "neutral"
    dissident = "dissident"
    revolutionary = "revolutionary"
    outsider = "outsider"


STRATUM_PRODUCTIVITY: dict[PopStratum, float] = {
    PopStratum.underclass: 0.6,
    PopStratum.worker: 1.0,
    PopStratum.specialist: 1.3,
    PopStratum.elite: 1.5,
}

STRATUM_RESEARCH: dict[PopStratum, float] = {
    PopStratum.underclass: 0.5,
    PopStratum.worker: 0.5,
    PopStratum.specialist: 1.5,
    PopStratum.elite: 2.0,
}

ETHOS_STABILITY: dict[PopEthos, int] = {
    PopEthos.establishment: 2,
    PopEthos.neutral: 0,
    PopEthos.dissident: -3,
    PopEthos.revolutionary: -5,
    PopEthos.outsider: -1,
}

CASUALTY_HAPPINESS_PENALTY = 10
REFUGEE_STABILITY_PENALTY = 2
GENERATIONS_TO_INTEGRATE = 3


def _clamp(value: int) -> int:
    return max(0, min(100, value))


@dataclass
class Pop:
    size: int
    species: PopSpecies
    stratum: PopStratum = PopStratum.worker
    happiness: int = 50
    education: int = 30
    health: int = 70
    ethos: PopEthos = PopEthos.neutral
    traits: list[PopTrait] = field(default_factory=list)
    is_refugee: bool = False
    origin_empire_id: uuid.UUID | None = None
    generations_since_immigration: int = 0
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self) -> None:
        self.size = max(0, self.size)
        self.happiness = _clamp(self.happiness)
        self.education = _clamp(self.education)
        self.health = _clamp(self.health)

    # -- factories ------------------------------------------------------------

    @classmethod
    def colonists(cls, size: int, species: PopSpecies) -> Pop:
        return cls(
            size=size,
            species=species,
            stratum=PopStratum.worker,
            happiness=60,
            education=40,
            health=80,
            ethos=PopEthos.neutral,
        )

    @classmethod
    def elite(cls, size: int, species: PopSpecies) -> Pop:
        return cls(
            size=size,
            species=species,
            stratum=PopStratum.elite,
            happiness=80,
            education=90,
            health=90,
            ethos=PopEthos.establishment,
        )

    @classmethod
    def refugees(
        cls, size: int, species: PopSpecies, origin_empire_id: uuid.UUID | None
    ) -> Pop:
        return cls(
            size=size,
            species=species,
            stratum=PopStratum.underclass,
            happiness=20,
            education=30,
            health=50,
            ethos=PopEthos.outsider,
            is_refugee=True,
            origin_empire_id=origin_empire_id,
        )

    # -- mutators -------------------------------------------------------------

    def grow(self, amount: int) -> None:
        self.size += max(0, amount)

    def take_casualties(self, amount: int) -> None:
        self.size = max(0, self.size - max(0, amount))
        self.happiness = _clamp(self.happiness - CASUALTY_HAPPINESS_PENALTY)

    def adjust_happiness(self, delta: int) -> None:
        """Shift happiness by ``delta``.  Gains are scaled by the traits' happiness modifiers."""
        if delta > 0:
            for trait in self.traits:
                delta *= trait.happiness_modifier
        self.happiness = _clamp(int(self.happiness + delta))

    def educate(self, amount: int) -> None:
        self.education = _clamp(self.education + amount)

    def improve_health(self, amount: int) -> None:
        self.health = _clamp(self.health + amount)

    def promote_stratum(self) -> None:
        """Move one step up the stratum scale; education rises by 10."""
        if self.stratum.rank < len(_STRATUM_ORDER) - 1:
            self.stratum = _STRATUM_ORDER[self.stratum.rank + 1]
        self.educate(10)

    def demote_stratum(self) -> None:
        """Move one step down the stratum scale; happiness drops by 20."""
        if self.stratum.rank > 0:
            self.stratum = _STRATUM_ORDER[self.stratum.rank - 1]
        self.adjust_happiness(-20)

    def integrate(self) -> None:
        """Advance a refugee pop one generation toward full integration."""
        if not self.is_refugee:
            return
        self.generations_since_immigration += 1
        if self.generations_since_immigration >= GENERATIONS_TO_INTEGRATE:
            self.is_refugee = False
            self.ethos = PopEthos.neutral
            self.adjust_happiness(10)

    def add_trait(self, trait: PopTrait) -> None:
        if trait not in self.traits:
            self.traits.append(trait)

    def remove_trait(self, trait: PopTrait) -> None:
        if trait in self.traits:
            self.traits.remove(trait)

    # -- derived values -------------------------------------------------------

    def get_productivity_modifier(self) -> float:
        from colonysim.data.species import get_species

        modifier = 1.0
        modifier *= 0.5 + self.education / 100.0  # 0.5 - 1.5
        modifier *= 0.7 + self.happiness / 200.0  # 0.7 - 1.2
        modifier *= 0.6 + self.health / 200.0  # 0.6 - 1.1
        modifier *= STRATUM_PRODUCTIVITY[self.stratum]
        for trait in self.traits:
            modifier *= trait.productivity_modifier
        modifier *= get_species(self.species).productivity_bonus
        return modifier

    def get_research_modifier(self) -> float:
        from colonysim.data.species import get_species

        modifier = self.education / 100.0
        modifier *= STRATUM_RESEARCH[self.stratum]
        for trait in self.traits:
            modifier *= trait.research_modifier
        modifier *= get_species(self.species).research_bonus
        return modifier

    def get_military_modifier(self) -> float:
        from colonysim.data.species import get_species

        return get_species(self.species).military_bonus

    def get_stability_contribution(self) -> int:
        """Signed stability contribution, scaled by size in blocks of ten."""
        contribution = 0
        if self.happiness < 30:
            contribution -= (30 - self.happiness) // 10
        elif self.happiness > 70:
            contribution += (self.happiness - 70) // 20

        contribution += ETHOS_STABILITY[self.ethos]

        if self.is_refugee:
            contribution -= REFUGEE_STABILITY_PENALTY

        return contribution * (self.size // 10)
