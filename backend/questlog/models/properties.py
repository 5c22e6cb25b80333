"""
Per-type entity property templates and typed read-time views.

Entities store `properties` as an open JSON object. The keys each type is
expected to carry come from `ENTITY_TEMPLATES`; the typed views below parse
that object leniently when a caller needs to follow a soft reference.
Nothing here rejects a write.
"""

from copy import deepcopy
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from questlog.models.domain.entity import Entity, EntityReference
from questlog.models.enums import EntityType, RelationshipType

ENTITY_TEMPLATES: dict[EntityType, dict[str, Any]] = {
    EntityType.NPC: {
        "race": "",
        "class": "",
        "alignment": "",
        "location": "",
        "relationship": "",
        "organization": "",
    },
    EntityType.CREATURE: {
        "type": "",
        "size": "",
        "alignment": "",
        "habitat": "",
        "challengeRating": "",
    },
    EntityType.LOCATION: {
        "type": "",
        "climate": "",
        "population": "",
        "government": "",
        "description": "",
        "activeOrganizations": [],
    },
    EntityType.ORGANIZATION: {
        "type": "",
        "alignment": "",
        "headquarters": "",
        "leader": "",
        "goals": "",
    },
}


def _as_entity_id(value: Any) -> Optional[int]:
    # "" and "0" are how the forms say "none"
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str) and value.strip().isdigit():
        parsed = int(value.strip())
        return parsed if parsed > 0 else None
    return None


class _PropertiesView(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class NpcProperties(_PropertiesView):
    race: Any = ""
    class_: Any = Field("", alias="class")
    alignment: Any = ""
    location: Any = ""
    relationship: Optional[RelationshipType] = None
    organization: Optional[int] = None

    @field_validator("relationship", mode="before")
    @classmethod
    def known_relationship(cls, value: Any) -> Optional[str]:
        if isinstance(value, str) and value in {r.value for r in RelationshipType}:
            return value
        return None

    @field_validator("organization", mode="before")
    @classmethod
    def organization_id(cls, value: Any) -> Optional[int]:
        return _as_entity_id(value)


class CreatureProperties(_PropertiesView):
    type: Any = ""
    size: Any = ""
    alignment: Any = ""
    habitat: Any = ""
    challengeRating: Any = ""


class LocationProperties(_PropertiesView):
    type: Any = ""
    climate: Any = ""
    population: Any = ""
    government: Any = ""
    description: Any = ""
    activeOrganizations: list[int] = Field(default_factory=list)

    @field_validator("activeOrganizations", mode="before")
    @classmethod
    def organization_ids(cls, value: Any) -> list[int]:
        if not isinstance(value, (list, tuple)):
            return []
        ids = (_as_entity_id(v) for v in value)
        return [i for i in ids if i is not None]


class OrganizationProperties(_PropertiesView):
    type: Any = ""
    alignment: Any = ""
    headquarters: Optional[int] = None
    leader: Any = ""
    goals: Any = ""

    @field_validator("headquarters", mode="before")
    @classmethod
    def headquarters_id(cls, value: Any) -> Optional[int]:
        return _as_entity_id(value)


PROPERTY_VIEWS: dict[EntityType, type[_PropertiesView]] = {
    EntityType.NPC: NpcProperties,
    EntityType.CREATURE: CreatureProperties,
    EntityType.LOCATION: LocationProperties,
    EntityType.ORGANIZATION: OrganizationProperties,
}


def apply_template(entity_type: EntityType, properties: dict[str, Any]) -> dict[str, Any]:
    """
    Fill in any template keys missing from `properties`.

    Supplied keys win, including keys the template does not know about.

    :param entity_type: Type whose template to apply
    :type entity_type: EntityType
    :param properties: Caller-supplied properties
    :type properties: dict[str, Any]
    :return: New properties dict
    :rtype: dict[str, Any]
    """
    merged = deepcopy(ENTITY_TEMPLATES[EntityType(entity_type)])
    merged.update(properties)
    return merged


def parse_properties(entity_type: EntityType, properties: dict[str, Any]) -> _PropertiesView:
    return PROPERTY_VIEWS[EntityType(entity_type)].model_validate(properties)


def entity_references(entity: Entity) -> list[EntityReference]:
    """
    List the soft references held in an entity's properties.

    :param entity: Entity to inspect
    :type entity: Entity
    :return: References in property order; empty for creatures
    :rtype: list[EntityReference]
    """
    view = parse_properties(entity.type, entity.properties)
    if isinstance(view, OrganizationProperties) and view.headquarters is not None:
        return [EntityReference(
            field="headquarters",
            entity_id=view.headquarters,
            expected_type=EntityType.LOCATION,
        )]
    if isinstance(view, LocationProperties):
        return [
            EntityReference(
                field="activeOrganizations",
                entity_id=org_id,
                expected_type=EntityType.ORGANIZATION,
            )
            for org_id in view.activeOrganizations
        ]
    if isinstance(view, NpcProperties) and view.organization is not None:
        return [EntityReference(
            field="organization",
            entity_id=view.organization,
            expected_type=EntityType.ORGANIZATION,
        )]
    return []
