"""
Questlog models.

Usage:
    from questlog.models import Journal, JournalCreate, Entity, EntityCreate
    from questlog.models import EntityType, ENTITY_TEMPLATES, apply_template
"""

# --- Enums ---
from questlog.models.enums import EntityType, RelationshipType

# --- Domain models ---
from questlog.models.domain import (
    User, UserCreate, UserLogin, UserRecord, check_password_policy,
    Journal, JournalCreate, JournalUpdate, Mention,
    Entity, EntityCreate, EntityUpdate,
    EntityReference, ResolvedReference, ResolvedMention,
)

# --- Property templates ---
from questlog.models.properties import (
    ENTITY_TEMPLATES,
    NpcProperties, CreatureProperties, LocationProperties, OrganizationProperties,
    apply_template,
    parse_properties,
    entity_references,
)

__all__ = [
    # Enums
    "EntityType", "RelationshipType",
    # Domain
    "User", "UserCreate", "UserLogin", "UserRecord", "check_password_policy",
    "Journal", "JournalCreate", "JournalUpdate", "Mention",
    "Entity", "EntityCreate", "EntityUpdate",
    "EntityReference", "ResolvedReference", "ResolvedMention",
    # Properties
    "ENTITY_TEMPLATES",
    "NpcProperties", "CreatureProperties", "LocationProperties", "OrganizationProperties",
    "apply_template", "parse_properties", "entity_references",
]
