"""Schemas for the one-shot metadata bootstrap payload."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


class EntityFields(BaseModel):
    """Field lists configured for one entity type."""

    model_config = ConfigDict(frozen=True)

    list_fields: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("listFields", "list_fields"),
    )
    form_fields: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("formFields", "form_fields"),
    )


class EntityType(BaseModel):
    """Entity type with its table and form field lists, immutable for a session."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    list_fields: tuple[str, ...] = ()
    form_fields: tuple[str, ...] = ()


class MetadataBootstrap(BaseModel):
    """Entity catalog, per-type field metadata and the connection alias."""

    entity_catalog: list[str] = Field(
        validation_alias=AliasChoices("entityCatalog", "objectsList", "entity_catalog"),
    )
    fields_info: dict[str, EntityFields] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("fieldsInfo", "fields_info"),
    )
    connection_alias: str = Field(
        validation_alias=AliasChoices("connectionAlias", "namedCred", "connection_alias"),
    )

    @model_validator(mode="after")
    def validate_catalog(self) -> "MetadataBootstrap":
        seen: set[str] = set()
        for name in self.entity_catalog:
            if not name.strip():
                raise ValueError("Entity type names must be non-empty")
            if name in seen:
                raise ValueError(f"Duplicate entity type in catalog: {name}")
            seen.add(name)
            if name not in self.fields_info:
                raise ValueError(f"Missing field metadata for entity type: {name}")
        return self

    def entity_types(self) -> list[EntityType]:
        """Return catalog entries in catalog order."""

        return [
            EntityType(
                name=name,
                list_fields=self.fields_info[name].list_fields,
                form_fields=self.fields_info[name].form_fields,
            )
            for name in self.entity_catalog
        ]
