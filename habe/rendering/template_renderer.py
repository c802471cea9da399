"""
Template rendering from datasets and template configurations.

Handles item selection, per-item filtering and template evaluation.
"""

import logging
from typing import Any, Dict, List, Optional

from ..config import ConfigLoader, DataLoader
from ..template import TemplateEnvironment, TemplateError, create_environment

logger = logging.getLogger(__name__)


class TemplateRenderer:
    """Renders datasets using template configurations."""

    def __init__(
        self,
        config_loader: ConfigLoader,
        data_loader: DataLoader,
        env: Optional[TemplateEnvironment] = None
    ):
        self.config_loader = config_loader
        self.data_loader = data_loader
        self.env = env or create_environment()
        self.jsonpath = self.env.jsonpath
        self.condition_evaluator = self.env.conditions

    def render(
        self,
        template_name: str,
        variables: Optional[Dict[str, str]] = None
    ) -> List[str]:
        """
        Render a template configuration.

        Args:
            template_name: Name of template config
            variables: Optional ${var} values for the foreach expression

        Returns:
            List of rendered outputs, one per selected item
        """
        config = self.config_loader.load_template(template_name)

        foreach_expr = config.get("foreach", "$")
        filter_expr = config.get("filter")
        template = self.env.compile(config["template"])

        data = self.data_loader.load_data(config["source"])

        # Evaluate foreach to get list of items
        items = self.jsonpath.evaluate(foreach_expr, data, variables)

        if filter_expr:
            items = [
                item for item in items
                if self.condition_evaluator.evaluate_condition(filter_expr, item)
            ]

        outputs = []
        for index, item in enumerate(items):
            try:
                rendered = template(item)
            except TemplateError as e:
                logger.error("Template '%s' failed on item %d: %s", template_name, index, e)
                raise
            if rendered.strip():
                outputs.append(rendered)

        logger.debug("Rendered %d of %d items for '%s'", len(outputs), len(items), template_name)
        return outputs

    def render_string(self, source: str, data: Any = None) -> str:
        """Render an ad-hoc template string against data."""
        return self.env.render(source, data)
