"""
Configuration Loader for the Neighbourhood Map Pipeline

This module provides a centralized way to load and access configuration
settings from the config.yaml file.

Usage:
    from ops.config_loader import Config

    config = Config()
    cases_json = config.get_input_path('cases_json')
    output = config.get_output_path('enriched_geojson')
    area_col = config.get_column_name('area_name')
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml  # type: ignore[import-untyped]
from loguru import logger

OPS_DIR = Path(__file__).parent


class Config:
    """Configuration manager for the neighbourhood map pipeline."""

    # Default values that can be overridden in config
    DEFAULTS: Dict[str, Any] = {
        "project_name": "Toronto COVID-19 Neighbourhood Map",
        "columns": {
            "area_name": "AREA_NAME",
            "case_neighbourhood": "Neighbourhood Name",
        },
        "output_files": {
            "enriched_geojson": "docs/out.geojson",
        },
    }

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Path to config file. If None, looks for:
                        1. Environment variable PIPELINE_CONFIG_PATH
                        2. config.yaml in current directory
                        3. config.yaml next to this module (ops/config.yaml)
        """
        if config_file is None:
            env_config = os.environ.get("PIPELINE_CONFIG_PATH")
            if env_config and Path(env_config).exists():
                config_file = env_config
                logger.debug(f"Using config from environment: {config_file}")
            elif Path("config.yaml").exists():
                config_file = "config.yaml"
            elif (OPS_DIR / "config.yaml").exists():
                config_file = OPS_DIR / "config.yaml"
                logger.debug("Using bundled ops/config.yaml")
            else:
                raise FileNotFoundError(
                    "No config.yaml found. Check current directory or set PIPELINE_CONFIG_PATH"
                )

        self.config_path = Path(config_file).resolve()
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        self.project_root = self._find_project_root()

        logger.debug(f"Loading config from: {self.config_path}")
        logger.debug(f"Project root: {self.project_root}")

        with open(self.config_path, "r") as f:
            self.data = yaml.safe_load(f) or {}

    def _find_project_root(self) -> Path:
        """If the config lives in ops/, the project root is its parent."""
        if self.config_path.parent.name == "ops":
            return self.config_path.parent.parent
        return self.config_path.parent

    def _resolve(self, section: str, key: str) -> Path:
        relative_path = self.get(f"{section}.{key}")
        if not relative_path:
            raise ValueError(f"File key '{key}' not found in config: {section}")
        return self.project_root / relative_path

    def get_input_path(self, filename_key: str) -> Path:
        """Get full path to an input file listed under input_files."""
        return self._resolve("input_files", filename_key)

    def get_output_path(self, filename_key: str) -> Path:
        """Get full path to an output file listed under output_files."""
        return self._resolve("output_files", filename_key)

    def get_column_name(self, column_key: str) -> str:
        """Get column name with defaults."""
        column = self.get(f"columns.{column_key}")
        if column is None:
            raise ValueError(f"Column '{column_key}' not found in config or defaults")
        return column

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation, falling back to DEFAULTS.

        Args:
            key_path: Dot-separated path to the configuration value
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key_path.split(".")

        for source in (self.data, self.DEFAULTS):
            value: Any = source
            for key in keys:
                if isinstance(value, dict) and key in value:
                    value = value[key]
                else:
                    value = None
                    break
            if value is not None:
                return value

        return default
