from enum import Enum


class Ability(str, Enum):
    NONE = "none"
    INTIMIDATE = "intimidate"
    STATIC = "static"
    LEVITATE = "levitate"
    MOXIE = "moxie"
    FLASH_FIRE = "flash_fire"
    OVERGROW = "overgrow"
    BLAZE = "blaze"
    TORRENT = "torrent"
