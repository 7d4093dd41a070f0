# =============================================================================
# referencime/validation.py  —  Request Validator
# =============================================================================
#
# Checks a caller's raw argument mapping against a tool's argument model
# and returns the normalized mapping that is sent to the backend:
#   - defaults applied
#   - undeclared fields dropped
#   - optional fields the caller did not set are left out entirely
#
# No coercion happens here: the models are strict (see schemas.py).
# =============================================================================

from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError

from referencime.errors import ValidationError
from referencime.models import ToolDefinition


def validate_arguments(definition: ToolDefinition, raw: Any) -> dict:
    """Validate ``raw`` for ``definition`` and return normalized arguments.

    Raises:
        ValidationError: listing every offending field and what was expected.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise ValidationError(
            definition.name,
            [("arguments", f"expected an object, got {type(raw).__name__}")],
        )

    try:
        parsed = definition.arguments.model_validate(dict(raw))
    except PydanticValidationError as exc:
        expected = {spec.name: spec.type for spec in definition.fields()}
        problems = [_describe(error, expected) for error in exc.errors()]
        raise ValidationError(definition.name, problems) from None

    return parsed.model_dump(exclude_none=True)


def _describe(error: dict, expected: dict[str, str]) -> tuple[str, str]:
    loc = error.get("loc") or ("arguments",)
    field = ".".join(str(part) for part in loc)
    reason = error.get("msg", "invalid value")
    top = str(loc[0])
    if top in expected:
        reason = f"{reason} (expected {expected[top]})"
    return field, reason
