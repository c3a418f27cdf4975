"""Base pydantic model for camelCase JSON payloads."""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from .exceptions import ValidationError


class CamelModel(BaseModel):
    """Model serialized with camelCase keys, accepting either key style on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_response(self) -> Dict[str, Any]:
        """Dump to a JSON-ready dict with camelCase keys, omitting unset optionals."""
        return self.model_dump(by_alias=True, mode='json', exclude_none=True)


def field_errors(exc: PydanticValidationError) -> List[str]:
    """Flatten pydantic errors into "field: message" strings."""
    messages = []
    for error in exc.errors():
        field = '.'.join(str(part) for part in error.get('loc', ())) or 'body'
        message = error.get('msg', 'Invalid value')
        if message.startswith('Value error, '):
            message = message[len('Value error, '):]
        messages.append(f"{field}: {message}")
    return messages


def validate_payload(model: type, data: Any, message: str = "Validation failed"):
    """
    Validate a request payload against a pydantic model.

    Raises:
        ValidationError: With one message per invalid field
    """
    if not isinstance(data, dict):
        raise ValidationError(message, errors=["body: Expected a JSON object"])

    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(message, errors=field_errors(e))
