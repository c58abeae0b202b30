from typing import Optional

from clicker_quest.enums import UnlockConditionType
from clicker_quest.schema.map_area import ItemDrop, MapArea, SpawnEntry, UnlockCondition

_AREA_LIST = [
    MapArea(
        id="tokiwa-forest",
        name="Viridian Forest",
        enemyDefinitions=[
            SpawnEntry(speciesId="pidgey", level=2, spawnWeight=60, baseCatchRate=0.4),
            SpawnEntry(speciesId="rattata", level=2, spawnWeight=70, baseCatchRate=0.45),
            SpawnEntry(speciesId="pidgey", level=3, spawnWeight=30, baseCatchRate=0.35),
            SpawnEntry(speciesId="rattata", level=3, spawnWeight=40, baseCatchRate=0.4),
            SpawnEntry(speciesId="bulbasaur", level=4, spawnWeight=10, baseCatchRate=0.2, drops=[ItemDrop(itemId="potion", dropRate=0.1)]),
        ],
        defaultRewardMoney=5,
        defaultGivesExperience=8,
        unlockConditionToNext=UnlockCondition(type=UnlockConditionType.DEFEAT_COUNT, count=10),
        nextAreaId="route-3",
    ),
    MapArea(
        id="route-3",
        name="Route 3",
        enemyDefinitions=[
            SpawnEntry(speciesId="pidgey", level=5, spawnWeight=40, baseCatchRate=0.3),
            SpawnEntry(speciesId="rattata", level=4, spawnWeight=30, baseCatchRate=0.35),
            SpawnEntry(speciesId="pikachu", level=6, spawnWeight=20, baseCatchRate=0.2, drops=[ItemDrop(itemId="poke-ball", dropRate=0.1)]),
            SpawnEntry(speciesId="charmander", level=6, spawnWeight=15, baseCatchRate=0.18),
            SpawnEntry(speciesId="squirtle", level=6, spawnWeight=15, baseCatchRate=0.18),
            SpawnEntry(
                speciesId="geodude",
                level=7,
                spawnWeight=25,
                baseCatchRate=0.25,
                isBoss=True,
                rewardMoney=30,
                givesExperience=25,
                drops=[ItemDrop(itemId="super-ball", dropRate=0.2)],
            ),
        ],
        defaultRewardMoney=15,
        defaultGivesExperience=20,
        unlockConditionToNext=UnlockCondition(type=UnlockConditionType.DEFEAT_BOSS, bossSpeciesId="geodude"),
        nextAreaId="pewter-city-gym",
    ),
    MapArea(
        id="pewter-city-gym",
        name="Pewter City Gym",
        isGym=True,
        enemyDefinitions=[
            SpawnEntry(speciesId="geodude", level=8, spawnWeight=80, baseCatchRate=0.25, rewardMoney=20, givesExperience=25),
            SpawnEntry(
                speciesId="onix",
                level=12,
                spawnWeight=20,
                isGymLeader=True,
                isBoss=True,
                moves=["tackle", "rock-throw", "headbutt", "screech"],
                rewardMoney=150,
                givesExperience=100,
                baseCatchRate=0.05,
                drops=[ItemDrop(itemId="boulder-badge", dropRate=1.0), ItemDrop(itemId="super-potion", dropRate=0.5)],
            ),
        ],
        defaultRewardMoney=30,
        defaultGivesExperience=40,
        unlockConditionToNext=UnlockCondition(type=UnlockConditionType.DEFEAT_BOSS, bossSpeciesId="onix"),
        nextAreaId="mt-moon-entrance",
    ),
    MapArea(
        id="mt-moon-entrance",
        name="Mt. Moon Entrance",
        enemyDefinitions=[
            SpawnEntry(speciesId="geodude", level=8, spawnWeight=50, baseCatchRate=0.2),
            SpawnEntry(speciesId="zubat", level=7, spawnWeight=60, baseCatchRate=0.22),
            SpawnEntry(speciesId="eevee", level=9, spawnWeight=20, baseCatchRate=0.1, drops=[ItemDrop(itemId="good-potion", dropRate=0.1)]),
            SpawnEntry(
                speciesId="snorlax",
                level=15,
                spawnWeight=5,
                baseCatchRate=0.05,
                isBoss=True,
                rewardMoney=200,
                givesExperience=150,
                drops=[ItemDrop(itemId="rare-candy", dropRate=0.1)],
            ),
        ],
        defaultRewardMoney=25,
        defaultGivesExperience=30,
        unlockConditionToNext=UnlockCondition(type=UnlockConditionType.DEFEAT_COUNT, count=15),
        nextAreaId=None,
    ),
]

MAP_AREAS: dict[str, MapArea] = {area.id: area for area in _AREA_LIST}


def get_map_area(area_id: str) -> Optional[MapArea]:
    return MAP_AREAS.get(area_id)
