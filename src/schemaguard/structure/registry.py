"""
Schema registry for schemaguard.

The registry is the lookup the traversals use to switch schema when they
cross into a related model, a component or a polymorphic entry. It is passed
explicitly to the validator and to every traversal; there is no global
instance.
"""

from collections.abc import Iterable
from typing import Any

from schemaguard.exceptions import DuplicateModelError, UnknownModelError
from schemaguard.structure.schema import Schema


class SchemaRegistry:
    """Registry of content schemas keyed by model uid.

    Models are registered once; re-registering a uid is an error so that a
    traversal never sees two definitions of the same model.
    """

    def __init__(self, schemas: Iterable[Schema] = ()):
        self._schemas: dict[str, Schema] = {}
        for schema in schemas:
            self.register(schema)

    @classmethod
    def from_definitions(cls, definitions: Iterable[dict[str, Any]]) -> "SchemaRegistry":
        """
        Build a registry from raw schema definitions.

        Params:
            definitions: Mappings accepted by Schema (uid, model_type, attributes)

        Returns:
            Registry holding one validated Schema per definition

        Raises:
            pydantic.ValidationError: If a definition is malformed
            DuplicateModelError: If two definitions share a uid
        """
        registry = cls()
        for definition in definitions:
            registry.register_definition(definition)
        return registry

    def register(self, schema: Schema) -> None:
        """
        Register a schema under its uid.

        Params:
            schema: Schema to store

        Raises:
            DuplicateModelError: If the uid is already registered
        """
        if schema.uid in self._schemas:
            raise DuplicateModelError(schema.uid)
        self._schemas[schema.uid] = schema

    def register_definition(self, definition: dict[str, Any]) -> Schema:
        """Validate a raw definition, register it and return the resulting Schema."""
        schema = Schema.model_validate(definition)
        self.register(schema)
        return schema

    def get_model(self, uid: str) -> Schema:
        """
        Get a schema by uid.

        Params:
            uid: Model uid to look up

        Returns:
            The registered Schema

        Raises:
            UnknownModelError: If the uid is not registered
        """
        try:
            return self._schemas[uid]
        except KeyError:
            raise UnknownModelError(uid, self.list_models()) from None

    def has_model(self, uid: str) -> bool:
        return uid in self._schemas

    def list_models(self) -> list[str]:
        """List all registered model uids."""
        return list(self._schemas.keys())
