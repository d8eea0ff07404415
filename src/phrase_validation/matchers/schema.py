"""JSON Schema conformance.

Schema validation is a pluggable capability: a compiler turns a schema into a
validation function returning a :class:`SchemaValidation`. The default
compiler is backed by ``jsonschema`` (Draft 2020-12).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from jsonpointer import JsonPointer
from jsonschema import Draft202012Validator, FormatChecker
from pydantic import BaseModel, Field

from phrase_validation.matchers.base import Matcher, MatcherContext, MatcherResult, describe


class SchemaError(BaseModel):
    """A single schema violation.

    Attributes
    ----------
    path_in_instance
        JSON Pointer to the offending location in the validated value.
    message
        Description of the violation.
    path_in_schema
        JSON Pointer to the schema keyword that failed.
    """

    path_in_instance: str
    message: str
    path_in_schema: str


class SchemaValidation(BaseModel):
    valid: bool
    errors: list[SchemaError] = Field(default_factory=list)


SchemaValidator = Callable[[Any], SchemaValidation]
SchemaCompiler = Callable[[Any], SchemaValidator]


def _pointer(parts: Any) -> str:
    return JsonPointer.from_parts(list(parts)).path


def compile_json_schema(schema: dict[str, Any]) -> SchemaValidator:
    """Compile ``schema`` with ``jsonschema``.

    Raises
    ------
    jsonschema.exceptions.SchemaError
        If ``schema`` is not itself a valid Draft 2020-12 schema.
    """
    Draft202012Validator.check_schema(schema)
    validator = Draft202012Validator(schema, format_checker=FormatChecker())

    def validate(value: Any) -> SchemaValidation:
        errors = sorted(validator.iter_errors(value), key=lambda e: list(e.absolute_path))
        return SchemaValidation(
            valid=not errors,
            errors=[
                SchemaError(
                    path_in_instance=_pointer(error.absolute_path),
                    message=error.message,
                    path_in_schema=_pointer(error.absolute_schema_path),
                )
                for error in errors
            ],
        )

    return validate


def make_schema_matcher(compile_schema: SchemaCompiler) -> Matcher:
    """Bind a schema compiler into a ``to_match_schema`` matcher."""

    def to_match_schema(ctx: MatcherContext, schema: Any) -> MatcherResult:
        result = compile_schema(schema)(ctx.received)
        if result.valid:
            message = f"expected {describe(ctx.received)} not to match schema"
        else:
            details = "\n".join(
                f"  {error.path_in_instance or '/'} {error.message} ({error.path_in_schema})"
                for error in result.errors
            )
            message = f"expected {describe(ctx.received)} to match schema\n{details}"
        return MatcherResult(passed=result.valid, message=message)

    return to_match_schema


to_match_schema = make_schema_matcher(compile_json_schema)
