"""
Template configuration and dataset loaders.

Handles loading of template configs and the JSON datasets they render.
"""

import json
from pathlib import Path
from typing import Any, Dict, List


class ConfigLoader:
    """Loads template configuration files."""

    def __init__(self, config_dir: str = "configs"):
        self.config_dir = Path(config_dir)
        self.templates_dir = self.config_dir / "templates"

    def load_template(self, template_name: str) -> Dict[str, Any]:
        """
        Load a template configuration by name.

        Args:
            template_name: Config name without the .json suffix

        Returns:
            Config dict with "source", "template" and optional "foreach"
        """
        template_file = self.templates_dir / f"{template_name}.json"
        if not template_file.exists():
            raise FileNotFoundError(f"Template config not found: {template_name}")

        with open(template_file) as f:
            config = json.load(f)

        for key in ("source", "template"):
            if not isinstance(config.get(key), str):
                raise ValueError(f"Template config '{template_name}' missing required '{key}' field")
        return config

    def get_available_templates(self) -> List[str]:
        return sorted(file.stem for file in self.templates_dir.glob("*.json"))


class DataLoader:
    """Loads JSON datasets referenced by template configs."""

    def __init__(self, data_dir: str = "data"):
        self.data_dir = Path(data_dir)

    def load_data(self, source: str) -> Any:
        """Load a dataset by name (the file stem under data_dir)."""
        data_file = self.data_dir / f"{source}.json"
        if not data_file.exists():
            raise FileNotFoundError(f"Dataset not found: {source}")

        with open(data_file) as f:
            return json.load(f)

    def get_available_datasets(self) -> List[str]:
        """Get list of all dataset names."""
        return sorted(file.stem for file in self.data_dir.glob("*.json"))
