"""
Validation entry points.

A PermissionsValidator is bound to one principal's ability, one model and a
default action. Each call resolves the permitted fields afresh, since they can
depend on the subject instance, composes the pipeline and runs it.
"""

import asyncio
from typing import Any

from schemaguard.ability import Ability, Subject, as_subject
from schemaguard.config import DEFAULT_SETTINGS, ValidationSettings
from schemaguard.core.types import EntityData, Query
from schemaguard.structure.registry import SchemaRegistry
from schemaguard.validation.pipelines import PipelineComposer
from schemaguard.validation.resolver import FieldAuthorizationResolver


class PermissionsValidator:
    """
    Validates queries and payloads against a principal's permitted fields.

    Params:
        ability: The principal's ability
        action: Default action, used when a call does not override it
        model: Uid of the model queried or written
        registry: Schema registry
        settings: Structural attribute names and policy constants

    Raises:
        UnknownModelError: If the model is not registered

    Example:
        >>> validator = PermissionsValidator(ability, "read", "api::article.article", registry)
        >>> await validator.validate_query({"filters": {"title": {"$eq": "Hello"}}})
        True
    """

    def __init__(
        self,
        ability: Ability,
        action: str,
        model: str,
        registry: SchemaRegistry,
        settings: ValidationSettings | None = None,
    ):
        self.action = action
        self.model = model
        self.settings = settings or DEFAULT_SETTINGS
        self.schema = registry.get_model(model)
        self.resolver = FieldAuthorizationResolver(ability)
        self.composer = PipelineComposer(registry, self.settings)

    async def validate_query(
        self,
        query: Query | list[Query],
        *,
        action: str | None = None,
        subject: Subject | str | None = None,
    ) -> bool | list[bool]:
        """
        Validate a query's filters, sort, fields and populate.

        Params:
            query: Query mapping, or a list of them validated independently
            action: Overrides the validator's default action
            subject: Overrides the subject derived from the query

        Returns:
            True, or one True per query for a list

        Raises:
            ValidationError: On the first rejected reference
        """
        if isinstance(query, list):
            return await self._broadcast(self.validate_query, query, action, subject)

        action, subject = self._resolve_options(query, action, subject)
        grant = self.resolver.resolve(action, subject)
        pipeline = self.composer.compose_query(self.schema, self.composer.query_permitted_fields(grant))
        return await pipeline.run(query)

    async def validate_input(
        self,
        data: EntityData | list[EntityData],
        *,
        action: str | None = None,
        subject: Subject | str | None = None,
    ) -> Any:
        """
        Validate an entity payload.

        Params:
            data: Payload mapping, or a list of them validated independently
            action: Overrides the validator's default action
            subject: Overrides the subject derived from the payload

        Returns:
            A copy of the payload without creator roles, or one per payload for a list

        Raises:
            ValidationError: On the first rejected reference
        """
        if isinstance(data, list):
            return await self._broadcast(self.validate_input, data, action, subject)

        action, subject = self._resolve_options(data, action, subject)
        grant = self.resolver.resolve(action, subject)
        pipeline = self.composer.compose_input(self.schema, self.composer.input_permitted_fields(grant, self.schema))
        return await pipeline.run(data)

    async def _broadcast(self, validate, items: list, action: str | None, subject: Subject | str | None) -> list:
        # Elements share no state; the first failure propagates
        return list(
            await asyncio.gather(*(validate(item, action=action, subject=subject) for item in items))
        )

    def _resolve_options(
        self, data: Any, action: str | None, subject: Subject | str | None
    ) -> tuple[str, Subject | str]:
        if subject is None:
            subject = as_subject(self.model, data)
        return action or self.action, subject
