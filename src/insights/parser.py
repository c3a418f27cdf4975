"""Structured-response parsing for free-text AI output."""

import json
from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from shared.exceptions import AIResponseParseError
from shared.models import field_errors

Shape = TypeVar('Shape', bound=BaseModel)

_decoder = json.JSONDecoder()


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Return the first decodable JSON object embedded in ``text``.

    Surrounding prose and markdown code fences are ignored.

    Raises:
        AIResponseParseError: If no JSON object can be decoded
    """
    index = text.find('{')
    while index != -1:
        try:
            value, _ = _decoder.raw_decode(text, index)
        except json.JSONDecodeError:
            pass
        else:
            if isinstance(value, dict):
                return value
        index = text.find('{', index + 1)

    raise AIResponseParseError("No JSON object found in AI response", raw_text=text)


def parse_structured_response(text: str, shape: Type[Shape]) -> Shape:
    """
    Parse an AI response into a pydantic model.

    Args:
        text: Raw response text
        shape: Model the embedded JSON object must satisfy

    Returns:
        Validated model instance

    Raises:
        AIResponseParseError: If no object is found or it does not match ``shape``
    """
    data = extract_json_object(text or '')

    try:
        return shape.model_validate(data)
    except PydanticValidationError as e:
        raise AIResponseParseError(
            f"AI response did not match the expected shape: {'; '.join(field_errors(e))}",
            raw_text=text
        )
