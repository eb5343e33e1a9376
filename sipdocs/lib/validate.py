"""
Schema checks for generated documents.

Frontmatter is checked against a JSON Schema shipped in sipdocs/schemas
before it is written, so a defect in the catalog or renderer never reaches
the docs repository.
"""

import json
from functools import lru_cache
from pathlib import Path

from jsonschema import validators
from jsonschema.exceptions import best_match

SCHEMAS_DIR = Path(__file__).parent.parent / "schemas"


class ValidationError(Exception):
    """A document does not match its schema."""

    def __init__(self, schema_name: str, message: str, path: str = None):
        self.schema_name = schema_name
        self.path = path
        super().__init__(f"[{schema_name}] {message}" + (f" at {path}" if path else ""))


@lru_cache(maxsize=None)
def get_validator(schema_name: str):
    """Build (once) a validator for `<schema_name>.schema.json`."""
    schema_path = SCHEMAS_DIR / f"{schema_name}.schema.json"
    if not schema_path.exists():
        raise ValidationError(schema_name, f"Schema file not found: {schema_path}")
    schema = json.loads(schema_path.read_text(encoding="utf-8"))
    validator_class = validators.validator_for(schema)
    validator_class.check_schema(schema)
    return validator_class(schema)


def validate(data: dict, schema_name: str) -> None:
    """
    Validate data against a named schema.

    Raises:
        ValidationError: with the most relevant failure when data is invalid
    """
    error = best_match(get_validator(schema_name).iter_errors(data))
    if error is None:
        return
    path = ".".join(str(p) for p in error.absolute_path) or "(root)"
    raise ValidationError(schema_name, error.message, path)
