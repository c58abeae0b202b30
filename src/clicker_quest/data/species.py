from typing import Optional

from clicker_quest.enums import Ability, Type
from clicker_quest.schema.species_info import EvolutionInfo, LevelUpMove, SpeciesInfo, StatBlock


def _stats(hp: int, attack: int, defense: int, special_attack: int, special_defense: int, speed: int) -> StatBlock:
    return StatBlock(hp=hp, attack=attack, defense=defense, specialAttack=special_attack, specialDefense=special_defense, speed=speed)


def _learnset(*entries: tuple[int, str]) -> list[LevelUpMove]:
    return [LevelUpMove(level=level, moveId=move_id) for level, move_id in entries]


_SPECIES_LIST = [
    SpeciesInfo(
        id="pidgey",
        name="Pidgey",
        types=[Type.NORMAL, Type.FLYING],
        baseStats=_stats(40, 45, 40, 35, 35, 56),
        levelUpMoves=_learnset((1, "tackle"), (5, "quick-attack"), (9, "peck"), (15, "agility")),
        catchRateBonus=1.2,
    ),
    SpeciesInfo(
        id="rattata",
        name="Rattata",
        types=[Type.NORMAL],
        baseStats=_stats(30, 56, 35, 25, 35, 72),
        levelUpMoves=_learnset((1, "tackle"), (1, "growl"), (4, "quick-attack"), (7, "bite")),
        catchRateBonus=1.3,
    ),
    SpeciesInfo(
        id="zubat",
        name="Zubat",
        types=[Type.POISON, Type.FLYING],
        baseStats=_stats(40, 45, 35, 30, 40, 55),
        levelUpMoves=_learnset((1, "absorb"), (5, "supersonic"), (10, "bite")),
        catchRateBonus=1.1,
    ),
    SpeciesInfo(
        id="pikachu",
        name="Pikachu",
        types=[Type.ELECTRIC],
        baseStats=_stats(35, 55, 40, 50, 50, 90),
        levelUpMoves=_learnset((1, "thundershock"), (1, "growl"), (5, "quick-attack"), (8, "thunder-wave"), (12, "agility"), (18, "thunderbolt")),
        catchRateBonus=1.0,
        abilities=[Ability.STATIC],
        evolution=EvolutionInfo(evolvesTo="raichu", itemId="thunder-stone"),
    ),
    SpeciesInfo(
        id="raichu",
        name="Raichu",
        types=[Type.ELECTRIC],
        baseStats=_stats(60, 90, 55, 90, 80, 110),
        levelUpMoves=_learnset((1, "thundershock"), (1, "growl"), (1, "quick-attack"), (1, "thunderbolt"), (1, "thunder-wave")),
        catchRateBonus=0.7,
        abilities=[Ability.STATIC],
    ),
    SpeciesInfo(
        id="bulbasaur",
        name="Bulbasaur",
        types=[Type.GRASS, Type.POISON],
        baseStats=_stats(45, 49, 49, 65, 65, 45),
        levelUpMoves=_learnset((1, "tackle"), (1, "growl"), (7, "vine-whip"), (10, "poison-powder"), (13, "sleep-powder"), (15, "razor-leaf")),
        catchRateBonus=1.1,
        abilities=[Ability.OVERGROW],
        evolution=EvolutionInfo(evolvesTo="ivysaur", level=16),
    ),
    SpeciesInfo(
        id="ivysaur",
        name="Ivysaur",
        types=[Type.GRASS, Type.POISON],
        baseStats=_stats(60, 62, 63, 80, 80, 60),
        levelUpMoves=_learnset((1, "tackle"), (1, "growl"), (1, "vine-whip"), (13, "sleep-powder"), (15, "razor-leaf"), (20, "poison-powder")),
        catchRateBonus=0.8,
        abilities=[Ability.OVERGROW],
    ),
    SpeciesInfo(
        id="charmander",
        name="Charmander",
        types=[Type.FIRE],
        baseStats=_stats(39, 52, 43, 60, 50, 65),
        levelUpMoves=_learnset((1, "scratch"), (1, "growl"), (7, "ember"), (10, "flame-wheel"), (13, "bite"), (19, "flamethrower"), (22, "will-o-wisp")),
        catchRateBonus=1.0,
        abilities=[Ability.BLAZE],
        evolution=EvolutionInfo(evolvesTo="charmeleon", level=16),
    ),
    SpeciesInfo(
        id="charmeleon",
        name="Charmeleon",
        types=[Type.FIRE],
        baseStats=_stats(58, 64, 58, 80, 65, 80),
        levelUpMoves=_learnset((1, "scratch"), (1, "growl"), (1, "ember"), (1, "flamethrower"), (13, "bite"), (19, "flame-wheel")),
        catchRateBonus=0.75,
        abilities=[Ability.BLAZE],
    ),
    SpeciesInfo(
        id="squirtle",
        name="Squirtle",
        types=[Type.WATER],
        baseStats=_stats(44, 48, 65, 50, 64, 43),
        levelUpMoves=_learnset((1, "tackle"), (1, "growl"), (7, "water-gun"), (10, "water-pulse"), (13, "bite"), (19, "hydro-pump")),
        catchRateBonus=1.0,
        abilities=[Ability.TORRENT],
        evolution=EvolutionInfo(evolvesTo="wartortle", level=16),
    ),
    SpeciesInfo(
        id="wartortle",
        name="Wartortle",
        types=[Type.WATER],
        baseStats=_stats(59, 63, 80, 65, 80, 58),
        levelUpMoves=_learnset((1, "tackle"), (1, "growl"), (1, "water-gun"), (1, "hydro-pump"), (13, "bite"), (20, "water-pulse"), (22, "barrier")),
        catchRateBonus=0.78,
        abilities=[Ability.TORRENT],
    ),
    SpeciesInfo(
        id="eevee",
        name="Eevee",
        types=[Type.NORMAL],
        baseStats=_stats(55, 55, 50, 45, 65, 55),
        levelUpMoves=_learnset((1, "tackle"), (1, "growl"), (8, "quick-attack"), (16, "bite"), (20, "headbutt")),
        catchRateBonus=0.9,
    ),
    SpeciesInfo(
        id="snorlax",
        name="Snorlax",
        types=[Type.NORMAL],
        baseStats=_stats(160, 110, 65, 65, 110, 30),
        levelUpMoves=_learnset((1, "tackle"), (6, "headbutt")),
        catchRateBonus=0.7,
    ),
    SpeciesInfo(
        id="geodude",
        name="Geodude",
        types=[Type.ROCK, Type.GROUND],
        baseStats=_stats(40, 80, 100, 30, 30, 20),
        levelUpMoves=_learnset((1, "tackle"), (10, "rock-throw"), (15, "screech")),
        catchRateBonus=1.0,
    ),
    SpeciesInfo(
        id="onix",
        name="Onix",
        types=[Type.ROCK, Type.GROUND],
        baseStats=_stats(35, 45, 160, 30, 45, 70),
        levelUpMoves=_learnset((1, "tackle"), (1, "rock-throw"), (10, "headbutt"), (15, "rock-slide"), (19, "screech")),
        catchRateBonus=0.4,
    ),
    SpeciesInfo(
        id="magikarp",
        name="Magikarp",
        types=[Type.WATER],
        baseStats=_stats(20, 10, 55, 15, 20, 80),
        levelUpMoves=_learnset((15, "tackle")),
        catchRateBonus=1.5,
        evolution=EvolutionInfo(evolvesTo="gyarados", level=20),
    ),
    SpeciesInfo(
        id="gyarados",
        name="Gyarados",
        types=[Type.WATER, Type.FLYING],
        baseStats=_stats(95, 125, 79, 60, 100, 81),
        levelUpMoves=_learnset((1, "bite"), (20, "hydro-pump"), (25, "swords-dance")),
        catchRateBonus=0.3,
        abilities=[Ability.INTIMIDATE],
    ),
    SpeciesInfo(
        id="gastly",
        name="Gastly",
        types=[Type.GHOST, Type.POISON],
        baseStats=_stats(30, 35, 30, 100, 35, 80),
        levelUpMoves=_learnset((1, "hypnosis"), (1, "lick")),
        catchRateBonus=0.8,
        abilities=[Ability.LEVITATE],
    ),
    SpeciesInfo(
        id="gengar",
        name="Gengar",
        types=[Type.GHOST, Type.POISON],
        baseStats=_stats(60, 65, 60, 130, 75, 110),
        levelUpMoves=_learnset((1, "hypnosis"), (1, "lick")),
        catchRateBonus=0.4,
        abilities=[Ability.LEVITATE],
    ),
    SpeciesInfo(
        id="lucario",
        name="Lucario",
        types=[Type.FIGHTING, Type.STEEL],
        baseStats=_stats(70, 110, 70, 115, 70, 90),
        levelUpMoves=_learnset((1, "quick-attack"), (1, "swords-dance")),
        catchRateBonus=0.4,
    ),
]

SPECIES_INFOS: dict[str, SpeciesInfo] = {species.id: species for species in _SPECIES_LIST}


def get_species_info(species_id: str) -> Optional[SpeciesInfo]:
    return SPECIES_INFOS.get(species_id)
