import json
import re
from typing import Any

from .exceptions import ParseError

_CAMEL_BOUNDARY = re.compile(r"(.)([A-Z])")


def to_snake_case(name: str) -> str:
    """
    Convert a document key into its accessor name.

    A separator is inserted before every capital letter that follows another
    character, then the result is lowercased: ``extraVars`` -> ``extra_vars``.
    """
    return _CAMEL_BOUNDARY.sub(r"\1_\2", str(name)).lower()


def load_json(text: str | bytes) -> Any:
    try:
        return json.loads(text)
    except (TypeError, ValueError) as e:
        raise ParseError(f"invalid JSON document: {e}") from e
