"""Partial-update helper shared by the entity services."""

from typing import Any, Dict

from pydantic import BaseModel

from zense.exceptions import ValidationError


def changed_fields(payload: BaseModel) -> Dict[str, Any]:
    """
    Returns only the fields the client actually sent.

    Explicit nulls are dropped as well: a nullable column is never cleared
    through an update body.
    """
    fields = {
        key: value
        for key, value in payload.model_dump(exclude_unset=True).items()
        if value is not None
    }
    if not fields:
        raise ValidationError("Request body must contain at least one field to update")
    return fields
