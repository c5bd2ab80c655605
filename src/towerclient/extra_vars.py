import json
from typing import Any, Mapping

import yaml

from .exceptions import ParseError
from .record import Record


class ExtraVars:
    """
    Launch variables given as a mapping, JSON text or YAML text.
    """

    def __init__(self, values: Mapping | Record | str | bytes | None = None):
        self.values = values

    def __repr__(self) -> str:
        return f"ExtraVars({self.values!r})"

    def to_dict(self) -> dict[str, Any]:
        if isinstance(self.values, Record):
            return self.values.to_dict()
        if isinstance(self.values, Mapping):
            return dict(self.values)
        if not self.values:
            return {}
        if not isinstance(self.values, (str, bytes)):
            raise ParseError(
                f"extra vars must be a mapping or text, got {type(self.values).__name__}"
            )

        try:
            parsed = json.loads(self.values)
        except ValueError:
            try:
                parsed = yaml.safe_load(self.values)
            except yaml.YAMLError as e:
                raise ParseError(f"extra vars are neither JSON nor YAML: {e}") from e

        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise ParseError(
                f"extra vars must be a mapping, got {type(parsed).__name__}"
            )
        return parsed

    def extra_vars(self) -> dict[str, str]:
        """
        Request body for endpoints that take ``extra_vars`` as JSON text.
        """
        return {"extra_vars": json.dumps(self.to_dict())}
