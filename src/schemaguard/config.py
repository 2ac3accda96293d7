"""
Validation settings for schemaguard.

Every structural attribute name and policy constant the validators rely on is
carried by a ValidationSettings instance passed to the validator, so that no
module reads global configuration.
"""

from pydantic import BaseModel, ConfigDict


class ValidationSettings(BaseModel):
    """
    Structural attribute names and policy constants used during validation.

    Defaults follow the content schema conventions of the admin surface.
    """

    model_config = ConfigDict(frozen=True)

    id_attribute: str = "id"
    document_id_attribute: str = "documentId"
    created_at_attribute: str = "createdAt"
    updated_at_attribute: str = "updatedAt"
    published_at_attribute: str = "publishedAt"
    created_by_attribute: str = "createdBy"
    updated_by_attribute: str = "updatedBy"
    component_attribute: str = "__component"
    morph_type_attribute: str = "__type"

    admin_user_model: str = "admin::user"
    admin_user_allowed_fields: tuple[str, ...] = (
        "id",
        "documentId",
        "firstname",
        "lastname",
        "username",
    )
    creator_role_attribute: str = "roles"

    sensitive_types: tuple[str, ...] = ("password",)

    @property
    def identifier_fields(self) -> tuple[str, ...]:
        return (self.id_attribute, self.document_id_attribute)

    @property
    def timestamp_fields(self) -> tuple[str, ...]:
        return (self.created_at_attribute, self.updated_at_attribute)

    @property
    def query_static_fields(self) -> tuple[str, ...]:
        """Fields always readable in a query once any field restriction applies."""
        return (
            *self.identifier_fields,
            self.component_attribute,
            *self.timestamp_fields,
            self.published_at_attribute,
        )

    @property
    def input_static_fields(self) -> tuple[str, ...]:
        """Fields always writable in a payload once any field restriction applies."""
        return (*self.identifier_fields, self.component_attribute)

    @property
    def creator_attributes(self) -> tuple[str, ...]:
        return (self.created_by_attribute, self.updated_by_attribute)


DEFAULT_SETTINGS = ValidationSettings()
