"""
Content schema models.

A Schema describes one model of the content registry: its uid and its
attribute definitions. Attribute definitions keep the shape used by content
schema files (a `type` plus type-specific keys) and are classified into a
closed set of kinds that the traversals dispatch on.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from schemaguard.config import DEFAULT_SETTINGS, ValidationSettings


class AttributeKind(Enum):
    """Structural kinds of attributes, as far as traversal is concerned."""

    SCALAR = "scalar"
    RELATION = "relation"
    COMPONENT = "component"
    DYNAMIC_ZONE = "dynamiczone"


_KINDS_BY_TYPE = {
    "relation": AttributeKind.RELATION,
    "component": AttributeKind.COMPONENT,
    "dynamiczone": AttributeKind.DYNAMIC_ZONE,
}


class AttributeConfig(BaseModel):
    """Administrative configuration attached to an attribute."""

    model_config = ConfigDict(extra="allow")

    # Never exposed through the admin surface, whatever the RBAC outcome
    hidden: bool = False


class Attribute(BaseModel):
    """
    Definition of a single attribute of a schema.

    Params:
        type: Attribute type as written in the content schema (string, password, relation, ...)
        relation: Relation flavour for relation attributes (oneToMany, morphToOne, ...)
        target: Target model uid for relation attributes
        component: Component model uid for component attributes
        components: Allowed component uids for dynamic zones
        repeatable: Whether a component attribute holds a list
        visible: False for attributes managed by the system and not shown to editors
        writable: False for attributes that cannot be set through a payload
        private: Whether the attribute is excluded from public responses
        config: Administrative configuration, including the hidden flag
    """

    model_config = ConfigDict(extra="allow")

    type: str
    relation: str | None = None
    target: str | None = None
    component: str | None = None
    components: list[str] = Field(default_factory=list)
    repeatable: bool = False
    visible: bool = True
    writable: bool = True
    private: bool = False
    config: AttributeConfig = Field(default_factory=AttributeConfig)

    @model_validator(mode="after")
    def check_targets(self) -> "Attribute":
        if self.kind is AttributeKind.RELATION and not self.is_morph and not self.target:
            raise ValueError("relation attributes require a target model")
        if self.kind is AttributeKind.COMPONENT and not self.component:
            raise ValueError("component attributes require a component model")
        return self

    @property
    def kind(self) -> AttributeKind:
        return _KINDS_BY_TYPE.get(self.type, AttributeKind.SCALAR)

    @property
    def is_scalar(self) -> bool:
        return self.kind is AttributeKind.SCALAR

    @property
    def is_morph(self) -> bool:
        """Whether this is a polymorphic relation whose target varies per entry."""
        return self.kind is AttributeKind.RELATION and (self.relation or "").lower().startswith("morph")

    def is_sensitive(self, sensitive_types: tuple[str, ...]) -> bool:
        """
        Check whether the attribute holds secret material.

        Params:
            sensitive_types: Scalar attribute types considered secret

        Returns:
            True for scalar attributes of one of the given types
        """
        return self.is_scalar and self.type in sensitive_types


class Schema(BaseModel):
    """
    A model of the content registry.

    Params:
        uid: Unique model identifier (e.g., "api::article.article")
        model_type: Whether this is a content type or a reusable component
        attributes: Attribute definitions keyed by attribute name
    """

    model_config = ConfigDict(protected_namespaces=())

    uid: str
    model_type: Literal["contentType", "component"] = "contentType"
    attributes: dict[str, Attribute] = Field(default_factory=dict)

    def get_attribute(self, key: str) -> Attribute | None:
        return self.attributes.get(key)

    def is_hidden(self, key: str) -> bool:
        """Check whether an attribute is hidden from the admin surface."""
        attribute = self.attributes.get(key)
        return attribute is not None and attribute.config.hidden

    def _system_attributes(self, settings: ValidationSettings) -> list[str]:
        timestamps = [name for name in settings.timestamp_fields if name in self.attributes]
        return [*settings.identifier_fields, *timestamps]

    def non_visible_attributes(self, settings: ValidationSettings = DEFAULT_SETTINGS) -> list[str]:
        """
        List attributes editors never see.

        Params:
            settings: Provides the identifier and timestamp attribute names

        Returns:
            Identifiers, timestamps present on the model, and attributes marked not visible
        """
        names = self._system_attributes(settings)
        names.extend(name for name, attribute in self.attributes.items() if not attribute.visible)
        return list(dict.fromkeys(names))

    def writable_attributes(self, settings: ValidationSettings = DEFAULT_SETTINGS) -> list[str]:
        """
        List attributes a payload may set.

        Params:
            settings: Provides the identifier and timestamp attribute names

        Returns:
            Every attribute except identifiers, timestamps and attributes marked not writable
        """
        non_writable = set(self._system_attributes(settings))
        non_writable.update(name for name, attribute in self.attributes.items() if not attribute.writable)
        return [name for name in self.attributes if name not in non_writable]
