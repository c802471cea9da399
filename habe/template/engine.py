"""
JSONPath selection and the options record passed to helpers.

JSONPath expressions pick the items a template configuration renders;
HelperOptions carries a helper's name and hash arguments from the host
engine into the helper catalog.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError

from .errors import TemplateSyntaxError


class JSONPathEngine:
    """Evaluates JSONPath expressions with variable substitution."""

    @staticmethod
    def substitute_variables(expression: str, variables: Dict[str, str]) -> str:
        """
        Replace ${var_name} placeholders with actual values.

        Args:
            expression: JSONPath expression with ${...} placeholders
            variables: Dict mapping variable names to values

        Returns:
            Expression with variables substituted
        """
        def replace_var(match: "re.Match[str]") -> str:
            var_name = match.group(1)
            return variables.get(var_name, match.group(0))

        return re.sub(r'\$\{(\w+)\}', replace_var, expression)

    @staticmethod
    def evaluate(expression: str, data: Any, variables: Optional[Dict[str, str]] = None) -> List[Any]:
        """
        Evaluate a JSONPath expression against data.

        Args:
            expression: JSONPath expression
            data: Data to query
            variables: Optional variables for substitution

        Returns:
            List of matching values
        """
        if variables:
            expression = JSONPathEngine.substitute_variables(expression, variables)

        try:
            jsonpath_expr = jsonpath_parse(expression)
        except (JsonPathLexerError, JsonPathParserError) as e:
            raise TemplateSyntaxError(f"Invalid JSONPath '{expression}': {e}") from e
        matches = jsonpath_expr.find(data)
        return [match.value for match in matches]

    @classmethod
    def first(cls, expression: str, data: Any) -> Any:
        """Return the first match of a JSONPath expression, or None."""
        results = cls.evaluate(expression, data)
        return results[0] if results else None



@dataclass(frozen=True)
class HelperOptions:
    """Trailing argument passed to every helper call."""

    name: str
    hash: Dict[str, Any] = field(default_factory=dict)
    data: Dict[str, Any] = field(default_factory=dict)
    context: Any = None
