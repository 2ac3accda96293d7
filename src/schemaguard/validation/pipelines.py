"""
Pipeline composer.

Builds, for one schema and one permitted field set, the ordered visitor lists
for every input shape and runs them through the matching traversal.
"""

from typing import Any

from schemaguard.config import ValidationSettings
from schemaguard.core.types import PermittedFields, Query
from schemaguard.core.visitor import Visitor
from schemaguard.structure.registry import SchemaRegistry
from schemaguard.structure.schema import Schema
from schemaguard.traversal import (
    WILDCARD,
    EntityTraversal,
    FieldsTraversal,
    FiltersTraversal,
    PopulateTraversal,
    SortTraversal,
)
from schemaguard.validation.resolver import FieldGrant
from schemaguard.validation.visitors import (
    RejectAdminUserFields,
    RejectDisallowedFields,
    RejectEmptyValues,
    RejectHiddenFields,
    RejectSensitiveFields,
    StripCreatorRoles,
)


class QueryPipeline:
    """Validates the filters, sort, fields and populate parts of a query."""

    def __init__(
        self,
        composer: "PipelineComposer",
        schema: Schema,
        filters: list[Visitor],
        sort: list[Visitor],
        fields: list[Visitor],
        populate: list[Visitor],
    ):
        self.composer = composer
        self.schema = schema
        self.filters = filters
        self.sort = sort
        self.fields = fields
        self.populate = populate

    async def run(self, query: Query) -> bool:
        """
        Validate a query; parts that are absent or empty are skipped.

        Raises:
            ValidationError: On the first rejected reference
        """
        composer = self.composer

        if query.get("filters"):
            await composer.filters.traverse(self.filters, self.schema, query["filters"])

        if query.get("sort"):
            await composer.sort.traverse(self.sort, self.schema, query["sort"])

        if query.get("fields"):
            await composer.fields.traverse(self.fields, self.schema, query["fields"])

        populate = query.get("populate")
        if populate and populate != WILDCARD:
            await composer.populate.traverse(self.populate, self.schema, populate)

        return True


class InputPipeline:
    """Validates an entity payload and returns it with creator roles stripped."""

    def __init__(self, composer: "PipelineComposer", schema: Schema, visitors: list[Visitor]):
        self.composer = composer
        self.schema = schema
        self.visitors = visitors

    async def run(self, data: Any) -> Any:
        return await self.composer.entity.traverse(self.visitors, self.schema, data)


class PipelineComposer:
    """
    Composes validation pipelines.

    Holds one traversal per input shape, built once over the registry and
    shared by every pipeline it composes.

    Params:
        registry: Schema registry
        settings: Structural attribute names and policy constants
    """

    def __init__(self, registry: SchemaRegistry, settings: ValidationSettings):
        self.settings = settings
        self.filters = FiltersTraversal(registry)
        self.sort = SortTraversal(registry)
        self.fields = FieldsTraversal(registry)
        self.populate = PopulateTraversal(registry, self.filters, self.sort, self.fields)
        self.entity = EntityTraversal(registry, settings)

    def query_permitted_fields(self, grant: FieldGrant) -> PermittedFields:
        """Granted fields plus identifiers, timestamps, publish state and component discriminator."""
        return grant.with_static_fields(self.settings.query_static_fields)

    def input_permitted_fields(self, grant: FieldGrant, schema: Schema) -> PermittedFields:
        """Granted fields plus identifiers, component discriminator and non-visible writable attributes."""
        writable = set(schema.writable_attributes(self.settings))
        non_visible_writable = [
            name for name in schema.non_visible_attributes(self.settings) if name in writable
        ]
        return grant.with_static_fields((*self.settings.input_static_fields, *non_visible_writable))

    def compose_query(self, schema: Schema, permitted: PermittedFields) -> QueryPipeline:
        """
        Build the query pipeline.

        Params:
            schema: Schema of the queried model
            permitted: Permitted fields, or None when unrestricted

        Returns:
            QueryPipeline with one visitor list per query part
        """
        settings = self.settings
        disallowed = RejectDisallowedFields(permitted)
        admin_user = RejectAdminUserFields(settings.admin_user_model, settings.admin_user_allowed_fields)
        sensitive = RejectSensitiveFields(settings.sensitive_types)

        return QueryPipeline(
            self,
            schema,
            filters=[disallowed, admin_user, sensitive, RejectEmptyValues()],
            sort=[disallowed, admin_user, sensitive, RejectEmptyValues(non_scalar_only=True)],
            fields=[disallowed, sensitive],
            populate=[disallowed, admin_user, RejectHiddenFields(), sensitive],
        )

    def compose_input(self, schema: Schema, permitted: PermittedFields) -> InputPipeline:
        """
        Build the entity input pipeline.

        Params:
            schema: Schema of the model being written
            permitted: Permitted fields, or None when unrestricted

        Returns:
            InputPipeline rejecting hidden and disallowed fields and
            stripping creator roles
        """
        settings = self.settings
        return InputPipeline(
            self,
            schema,
            [
                RejectHiddenFields(),
                RejectDisallowedFields(permitted),
                StripCreatorRoles(settings.creator_attributes, settings.creator_role_attribute),
            ],
        )
