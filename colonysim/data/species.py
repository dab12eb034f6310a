from dataclasses import dataclass

from colonysim.models.pop import PopSpecies


@dataclass(frozen=True)
class SpeciesData:
    name: str
    species_id: PopSpecies
    description: str
    productivity_bonus: float = 1.0
    research_bonus: float = 1.0
    military_bonus: float = 1.0
    growth_bonus: float = 1.0


_DEFAULT_DESCRIPTION = "A sentient species of the galaxy."

SPECIES_DATA: dict[PopSpecies, SpeciesData] = {
    PopSpecies.human: SpeciesData(
        name="Human",
        species_id=PopSpecies.human,
        description="Humans are adaptable and ambitious, spreading across the galaxy.",
        research_bonus=1.1,
    ),
    PopSpecies.vulcan: SpeciesData(
        name="Vulcan",
        species_id=PopSpecies.vulcan,
        description="Logic-driven species with exceptional mental discipline.",
        productivity_bonus=1.2,
        research_bonus=1.5,
        military_bonus=0.8,
    ),
    PopSpecies.klingon: SpeciesData(
        name="Klingon",
        species_id=PopSpecies.klingon,
        description="A warrior culture that values honor above all.",
        productivity_bonus=0.9,
        research_bonus=0.7,
        military_bonus=1.5,
    ),
    PopSpecies.romulan: SpeciesData(
        name="Romulan",
        species_id=PopSpecies.romulan,
        description="Secretive and cunning, masters of intrigue.",
        productivity_bonus=1.1,
        military_bonus=1.2,
    ),
    PopSpecies.cardassian: SpeciesData(
        name="Cardassian",
        species_id=PopSpecies.cardassian,
        description="Disciplined people with strong family loyalty.",
        productivity_bonus=1.15,
        research_bonus=1.1,
        military_bonus=1.1,
    ),
    PopSpecies.ferengi: SpeciesData(
        name="Ferengi",
        species_id=PopSpecies.ferengi,
        description="Profit-driven merchants with the Rules of Acquisition.",
        productivity_bonus=1.3,
        research_bonus=0.8,
        military_bonus=0.5,
    ),
    PopSpecies.bajoran: SpeciesData(
        name="Bajoran",
        species_id=PopSpecies.bajoran,
        description="Deeply spiritual people who endured decades of occupation.",
    ),
    PopSpecies.trill: SpeciesData(
        name="Trill",
        species_id=PopSpecies.trill,
        description=_DEFAULT_DESCRIPTION,
        productivity_bonus=1.1,
        research_bonus=1.3,
    ),
    PopSpecies.betazoid: SpeciesData(
        name="Betazoid",
        species_id=PopSpecies.betazoid,
        description=_DEFAULT_DESCRIPTION,
        productivity_bonus=0.95,
        military_bonus=0.7,
    ),
    PopSpecies.andorian: SpeciesData(
        name="Andorian",
        species_id=PopSpecies.andorian,
        description=_DEFAULT_DESCRIPTION,
        productivity_bonus=1.05,
        military_bonus=1.2,
    ),
    PopSpecies.tellarite: SpeciesData(
        name="Tellarite",
        species_id=PopSpecies.tellarite,
        description=_DEFAULT_DESCRIPTION,
        productivity_bonus=1.1,
    ),
    PopSpecies.bolian: SpeciesData(
        name="Bolian",
        species_id=PopSpecies.bolian,
        description=_DEFAULT_DESCRIPTION,
    ),
    PopSpecies.breen: SpeciesData(
        name="Breen",
        species_id=PopSpecies.breen,
        description=_DEFAULT_DESCRIPTION,
    ),
    PopSpecies.jem_hadar: SpeciesData(
        name="Jem'Hadar",
        species_id=PopSpecies.jem_hadar,
        description=_DEFAULT_DESCRIPTION,
        military_bonus=1.8,
    ),
    PopSpecies.vorta: SpeciesData(
        name="Vorta",
        species_id=PopSpecies.vorta,
        description=_DEFAULT_DESCRIPTION,
    ),
    PopSpecies.borg_drone: SpeciesData(
        name="Liberated Borg",
        species_id=PopSpecies.borg_drone,
        description=_DEFAULT_DESCRIPTION,
        productivity_bonus=1.4,
        research_bonus=0.5,
        # Drones were never born; liberated collectives grow slowly
        growth_bonus=0.5,
    ),
    PopSpecies.other: SpeciesData(
        name="Other",
        species_id=PopSpecies.other,
        description=_DEFAULT_DESCRIPTION,
    ),
}


def get_species(species: PopSpecies) -> SpeciesData:
    return SPECIES_DATA[species]


def list_species() -> list[SpeciesData]:
    return list(SPECIES_DATA.values())
