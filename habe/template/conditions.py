"""
Condition evaluation for template configurations.

A condition is a helper call such as "gt count 0" or "and lines". It is
judged with the same truthiness policy as the (and ..), (or ..) and
(not ..) helpers, so 0 and empty lists read as false.
"""

from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .environment import TemplateEnvironment

# Renders "1" when the condition holds under the catalog's (not ..)
CONDITION_TEMPLATE = "{{{{#if (not ({condition}))}}}}{{{{else}}}}1{{{{/if}}}}"


class ConditionEvaluator:
    """Evaluates conditional expressions for template logic."""

    def __init__(self, env: 'TemplateEnvironment'):
        self.env = env

    def evaluate_condition(self, condition: str, data: Any) -> bool:
        """
        Evaluate a condition expression.

        Args:
            condition: Helper call (e.g., "gt count 0", "and a (not b)")
            data: Data context

        Returns:
            Boolean result
        """
        source = CONDITION_TEMPLATE.format(condition=condition.strip())
        return self.env.render(source, data) == "1"
