"""
Configuration loading (Hydra compose over the packaged conf/ directory).
"""

from typing import List, Optional
import logging

import hydra
from omegaconf import DictConfig


def load_config(overrides: Optional[List[str]] = None,
                config_name: str = "config") -> DictConfig:
    """
    Compose the textindex configuration.

    Args:
        overrides: Hydra override strings, e.g. ["index.mode=prefix"]
        config_name: Name of the config file in textindex/conf

    Returns:
        Composed DictConfig
    """
    with hydra.initialize(version_base=None, config_path="conf"):
        return hydra.compose(config_name=config_name, overrides=overrides or [])


def setup_logging(config: DictConfig) -> None:
    """Configure root logging from the ``logging`` section."""
    logging.basicConfig(
        level=getattr(logging, str(config.logging.level).upper()),
        format=config.logging.format,
    )
