"""Content tables for procedural generation.

Room descriptions, scenery details and item templates. Templates are
plain dicts handed to ``item_from_dict``; a fresh ID is assigned each
time one is instantiated.
"""

from __future__ import annotations

from typing import Any

from dungeon_engine.models.enums import ItemType, RoomType


ROOM_DESCRIPTIONS: dict[RoomType, tuple[str, ...]] = {
    RoomType.ENTRANCE: (
        "A torch-lit entrance with ancient stone steps leading down into darkness.",
        "A massive iron door marks the entrance to the dungeon, groaning as it swings open.",
        "A narrow passageway descends steeply into the earth, cool air flowing from below.",
    ),
    RoomType.CORRIDOR: (
        "A dimly lit corridor stretches before you, the walls glistening with moisture.",
        "A narrow hallway with cracked stone floor tiles and cobwebs in the corners.",
        "A twisting passage with flickering torches casting dancing shadows on the walls.",
    ),
    RoomType.CHAMBER: (
        "A spacious chamber with high ceilings supported by crumbling stone columns.",
        "A circular room with mysterious symbols etched into the floor.",
        "A damp chamber with water dripping from the ceiling, forming small puddles.",
    ),
    RoomType.TREASURY: (
        "A small room with ornate chests and display cases, once used to store valuables.",
        "A secure chamber with heavy iron lockboxes built into the walls.",
        "A treasury room with pedestals where valuable artifacts were once displayed.",
    ),
    RoomType.ARMORY: (
        "An old armory with empty weapon racks and broken armor stands.",
        "A room lined with weapon racks and training dummies, long abandoned.",
        "An armory with rusty weapons hanging on the walls and scattered across the floor.",
    ),
    RoomType.LIBRARY: (
        "A forgotten library with rotting bookshelves and decaying tomes.",
        "A study room with ancient scrolls and manuscripts scattered about.",
        "A chamber with wall-to-wall bookshelves, many books still intact despite the years.",
    ),
    RoomType.RITUAL: (
        "A disturbing ritual chamber with a large stone altar in the center.",
        "A room with arcane circles carved into the floor, giving off a faint glow.",
        "A dark chamber with strange symbols painted on the walls in what looks like dried blood.",
    ),
    RoomType.PRISON: (
        "A grim chamber with rusted iron cages and shackles hanging from the walls.",
        "A prison block with small cells lining both sides of a narrow corridor.",
        "A torture chamber with sinister devices and dark stains on the floor.",
    ),
    RoomType.CRYPT: (
        "A solemn crypt with stone sarcophagi arranged in rows.",
        "A burial chamber with wall niches containing the remains of the deceased.",
        "A mausoleum-like room with elaborate coffins and funerary art.",
    ),
    RoomType.CAVERN: (
        "A natural cavern with stalactites hanging from the ceiling and stalagmites rising from the floor.",
        "A large cave with a small underground stream flowing through it.",
        "A spacious grotto with glowing fungi providing dim illumination.",
    ),
    RoomType.FORGE: (
        "An ancient forge with dormant furnaces and anvils covered in dust.",
        "A blacksmith's workshop with hammers, tongs, and other tools still laid out.",
        "A smelting room with large furnaces and molds for casting metal.",
    ),
    RoomType.LABORATORY: (
        "A wizard's laboratory filled with strange apparatus and dusty alchemical equipment.",
        "An alchemist's workshop with tables covered in vials, tubes, and magical ingredients.",
        "An arcane research room with diagrams etched into the walls and ceiling.",
    ),
    RoomType.LAIR: (
        "A vast cavern littered with bones, the air thick with the stench of something large.",
        "A high-vaulted hall where claw marks score every pillar.",
        "A smoky den piled with stolen trinkets and the remains of unlucky adventurers.",
    ),
}

OBJECT_DESCRIPTIONS: dict[str, tuple[str, ...]] = {
    "furniture": (
        "A wooden table, its surface covered in dust and scratches.",
        "A broken chair lies on its side in the corner.",
        "A bed with rotting sheets and a collapsed frame.",
        "A heavy oak cabinet with most of its doors hanging open.",
    ),
    "decoration": (
        "Faded tapestries hang on the walls, their designs barely visible.",
        "Iron sconces hold burnt-out torches along the walls.",
        "A cracked mirror reflects a distorted image of the room.",
        "Stone statues of forgotten heroes stand silent guard.",
    ),
    "container": (
        "A small wooden chest with rusted metal bindings.",
        "A large iron lockbox sits in the corner.",
        "Clay pots of various sizes are arranged along the wall.",
        "A leather satchel has been discarded on the floor.",
    ),
    "debris": (
        "Broken stones and debris are scattered across the floor.",
        "Pieces of rotted wood and fabric litter the ground.",
        "Fragments of pottery and glass crunch under your feet.",
        "Piles of rubble have fallen from the damaged ceiling.",
    ),
}

ITEM_TEMPLATES: dict[ItemType, tuple[dict[str, Any], ...]] = {
    ItemType.WEAPON: (
        {"name": "Rusty Dagger", "damage": "1d4", "value": 2, "weight": 1},
        {"name": "Short Sword", "damage": "1d6", "value": 10, "weight": 2},
        {"name": "Mace", "damage": "1d6", "value": 5, "weight": 4},
        {"name": "Battleaxe", "damage": "1d8", "value": 10, "weight": 4},
    ),
    ItemType.ARMOR: (
        {"name": "Leather Armor", "protection": 1, "value": 10, "weight": 10},
        {"name": "Chainmail", "protection": 2, "value": 75, "weight": 20},
        {"name": "Shield", "protection": 1, "value": 10, "weight": 6},
    ),
    ItemType.POTION: (
        {"name": "Health Potion", "effect": "heal", "power": 20, "value": 50, "weight": 0.5},
        {"name": "Strength Potion", "effect": "strength", "power": 5, "value": 75, "weight": 0.5},
        {"name": "Antidote", "effect": "cure", "power": 1, "value": 25, "weight": 0.5},
    ),
    ItemType.TREASURE: (
        {"name": "Gold Coins", "value": 10, "weight": 0.1},
        {"name": "Silver Ring", "value": 25, "weight": 0.1},
        {"name": "Gemstone", "value": 50, "weight": 0.1},
        {"name": "Golden Amulet", "value": 100, "weight": 0.5},
    ),
    ItemType.KEY: (
        {"name": "Iron Key", "value": 1, "weight": 0.1},
        {"name": "Brass Key", "value": 1, "weight": 0.1},
        {"name": "Silver Key", "value": 5, "weight": 0.1},
    ),
}

# (name, health, strength, dexterity) modifiers per monster archetype
MONSTER_ARCHETYPES: tuple[tuple[str, int, int, int], ...] = (
    ("Goblin", -5, -1, 2),
    ("Orc", 5, 2, 0),
    ("Skeleton", -10, 0, 1),
    ("Zombie", 10, 1, -2),
    ("Troll", 15, 3, -1),
    ("Giant Rat", -15, -2, 3),
)

MONSTER_ADJECTIVES: tuple[str, ...] = (
    "Fierce",
    "Savage",
    "Wild",
    "Rabid",
    "Crazed",
    "Battle-scarred",
    "Wounded",
    "Enraged",
    "Ancient",
    "Young",
)


__all__ = [
    "ROOM_DESCRIPTIONS",
    "OBJECT_DESCRIPTIONS",
    "ITEM_TEMPLATES",
    "MONSTER_ARCHETYPES",
    "MONSTER_ADJECTIVES",
]
