"""Input validation utilities."""
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from gemedit.exceptions import InputValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_input(schema: Type[ModelT], **data: Any) -> ModelT:
    """
    Validate tool/CLI arguments against a request schema.

    Arguments passed as None are dropped so schema defaults apply.

    Raises:
        InputValidationError: naming the first failing field
    """
    payload = {key: value for key, value in data.items() if value is not None}
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        issue = e.errors()[0]
        field = _field_name(issue.get("loc", ()))
        raise InputValidationError(field, _issue_message(issue)) from e


def _field_name(loc: tuple) -> str:
    # Union branches add type names to loc (e.g. ('require', 'str'));
    # keep the field and list indices only.
    if not loc:
        return "root"
    parts = [str(loc[0])]
    parts.extend(str(part) for part in loc[1:] if isinstance(part, int))
    return ".".join(parts)


def _issue_message(issue: dict) -> str:
    if issue.get("type") == "string_pattern_mismatch":
        field = issue.get("loc", ("value",))[0]
        if field == "gem_name":
            return "Invalid gem name format"
        if field == "version":
            return "Invalid version format"
    return issue.get("msg", "Invalid value")
