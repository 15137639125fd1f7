"""JSON codec for wire payloads.

Encoding is a pure pydantic dump. Decoding is best-effort: missing fields keep
their defaults, mismatched fields are reset to their defaults, and malformed
bodies produce a default record. Pass ``strict=True`` to get a DecodeError
instead.
"""

from __future__ import annotations

import json
import logging
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from gameapi.client.exceptions import DecodeError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def encode(record: BaseModel) -> str:
    """Serialize a model to its JSON wire form.

    Fields set to None are omitted. Nested models, lists and enums are
    serialized through their JSON representation.
    """
    return record.model_dump_json(by_alias=True, exclude_none=True)


def decode(json_string: str | bytes, model: type[T], *, strict: bool = False) -> T:
    """Parse a JSON body into an instance of ``model``.

    Args:
        json_string: Raw response body.
        model: Pydantic model class whose fields all have defaults.
        strict: Raise DecodeError instead of defaulting bad input.

    Returns:
        The decoded record. Extra JSON keys are ignored.

    Raises:
        DecodeError: Only when ``strict`` is set and the body is malformed,
            not a JSON object, or has fields of the wrong type.
    """
    try:
        data = json.loads(json_string)
    except (ValueError, RecursionError) as e:
        # RecursionError: nesting deeper than the json parser can follow
        if strict:
            raise DecodeError(f"Malformed JSON for {model.__name__}: {e}") from e
        logger.debug("Malformed JSON for %s, using defaults: %s", model.__name__, e)
        return model()

    if not isinstance(data, dict):
        if strict:
            raise DecodeError(
                f"Expected a JSON object for {model.__name__}, "
                f"got {type(data).__name__}"
            )
        logger.debug("Non-object JSON for %s, using defaults", model.__name__)
        return model()

    try:
        return model.model_validate(data)
    except ValidationError as e:
        if strict:
            raise DecodeError(
                f"Response validation error for {model.__name__}: {e}",
                fields=_error_fields(e),
            ) from e
        return _decode_partial(data, model, e)


def _decode_partial(data: dict, model: type[T], error: ValidationError) -> T:
    """Drop offending top-level keys until the remaining data validates."""
    remaining = dict(data)
    dropped: list[str] = []
    # Each pass removes at least one key, so this terminates
    while True:
        bad = [name for name in _error_fields(error) if name in remaining]
        if not bad:
            logger.debug("Unrecoverable body for %s, using defaults", model.__name__)
            return model()
        for name in bad:
            remaining.pop(name)
        dropped.extend(bad)
        try:
            record = model.model_validate(remaining)
        except ValidationError as e:
            error = e
            continue
        logger.debug("Defaulted mismatched fields for %s: %s", model.__name__, dropped)
        return record


def _error_fields(error: ValidationError) -> list[str]:
    fields: list[str] = []
    for detail in error.errors():
        loc = detail.get("loc") or ()
        if loc and str(loc[0]) not in fields:
            fields.append(str(loc[0]))
    return fields
