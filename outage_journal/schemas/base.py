"""Shared schema configuration."""

from pydantic import BaseModel, ConfigDict


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys, populated by either form."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def empty_to_none(value):
    """Treat blank form values (``""``, ``0``) as an unset reference."""
    if value in ("", 0):
        return None
    return value


class SuccessResponse(CamelModel):
    """Acknowledgement returned by update and delete operations."""

    success: bool = True


def not_null(value):
    """Reject an explicit ``null`` for a column that cannot be cleared."""
    if value is None:
        raise ValueError("must not be null")
    return value
