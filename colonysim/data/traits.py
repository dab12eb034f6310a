"""Static definitions for pop traits.

Each trait is a set of multiplicative modifiers applied on top of a pop's
base productivity, research and happiness.  A modifier of 1.0 is neutral.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PopTrait:
    trait_id: str
    name: str
    description: str
    productivity_modifier: float = 1.0
    research_modifier: float = 1.0
    happiness_modifier: float = 1.0


INDUSTRIOUS = PopTrait(
    trait_id="industrious",
    name="Industrious",
    description="These people have a strong work ethic.",
    productivity_modifier=1.2,
)

EDUCATED = PopTrait(
    trait_id="educated",
    name="Educated",
    description="This population has access to good education.",
    productivity_modifier=1.1,
    research_modifier=1.3,
)

OPPRESSED = PopTrait(
    trait_id="oppressed",
    name="Oppressed",
    description="This population has suffered under harsh rule.",
    productivity_modifier=0.8,
    happiness_modifier=0.7,
)

LOYAL = PopTrait(
    trait_id="loyal",
    name="Loyal",
    description="Steadfast supporters of the empire.",
    happiness_modifier=1.1,
)

REBELLIOUS = PopTrait(
    trait_id="rebellious",
    name="Rebellious",
    description="Resentful of authority.",
    productivity_modifier=0.9,
    happiness_modifier=0.8,
)

ARTISTIC = PopTrait(
    trait_id="artistic",
    name="Artistic",
    description="A culturally rich population.",
    research_modifier=0.9,
    happiness_modifier=1.1,
)

_ALL_TRAITS: dict[str, PopTrait] = {
    trait.trait_id: trait
    for trait in (INDUSTRIOUS, EDUCATED, OPPRESSED, LOYAL, REBELLIOUS, ARTISTIC)
}


def get_trait(trait_id: str) -> PopTrait:
    """Return a PopTrait definition or raise KeyError."""
    trait = _ALL_TRAITS.get(trait_id)
    if trait is None:
        raise KeyError(f"Unknown trait: '{trait_id}'")
    return trait


def list_traits() -> list[PopTrait]:
    return list(_ALL_TRAITS.values())
