"""
Enum definitions for the Questlog API.

Both sets are closed: values outside them are rejected at validation time.
"""
from enum import Enum


class EntityType(str, Enum):
    """Kind of campaign entity."""
    NPC = "npc"
    CREATURE = "creature"
    LOCATION = "location"
    ORGANIZATION = "organization"


class RelationshipType(str, Enum):
    """How an NPC stands towards the party."""
    ALLY = "ally"
    ACQUAINTANCE = "acquaintance"
    ENEMY = "enemy"
