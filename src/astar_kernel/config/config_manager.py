"""Hydra-backed loading of the search configuration.

The packaged ``conf/config.yaml`` is composed with dotted override strings
(``search.tie_break=lifo``) and validated before use. The most recently
loaded configuration is also kept module-wide for ``get_config``.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from hydra import compose, initialize_config_dir
from hydra.core.global_hydra import GlobalHydra
from omegaconf import DictConfig, OmegaConf, open_dict

from .validators import validate_config

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent.parent / "conf"

_global_config: Optional[DictConfig] = None


class ConfigManager:
    """Loads, queries and adjusts one configuration tree."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_dir: Directory holding ``<name>.yaml`` files; the packaged
                defaults when None

        Raises:
            FileNotFoundError: If the directory does not exist
        """
        self.config_dir = Path(config_dir or DEFAULT_CONFIG_DIR).resolve()
        self.config: Optional[DictConfig] = None

        if not self.config_dir.is_dir():
            raise FileNotFoundError(f"Configuration directory not found: {self.config_dir}")

    def load_config(self,
                    config_name: str = "config",
                    overrides: Optional[List[str]] = None,
                    validate: bool = True) -> DictConfig:
        """Compose ``config_name`` with ``overrides`` and make it current.

        Args:
            config_name: Config file name without ``.yaml``
            overrides: Hydra override strings
            validate: Run ``validate_config`` on the composed tree

        Returns:
            The composed configuration

        Raises:
            ConfigValidationError: If validation is enabled and fails
        """
        overrides = list(overrides or [])

        # compose() refuses to run while another Hydra instance is active
        GlobalHydra.instance().clear()
        with initialize_config_dir(config_dir=str(self.config_dir), version_base=None):
            cfg = compose(config_name=config_name, overrides=overrides)

        if validate:
            validate_config(cfg)

        global _global_config
        self.config = _global_config = cfg

        logger.info(f"Loaded configuration {config_name} from {self.config_dir}"
                    + (f" with overrides {overrides}" if overrides else ""))
        return cfg

    def get_config(self) -> Optional[DictConfig]:
        return self.config

    def _require_config(self) -> DictConfig:
        if self.config is None:
            raise RuntimeError("No configuration loaded. Call load_config() first.")
        return self.config

    def get_parameter(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key such as ``search.tie_break``."""
        return OmegaConf.select(self._require_config(), key, default=default)

    def set_parameter(self, key: str, value: Any) -> None:
        """Assign a dotted key, creating missing nodes."""
        cfg = self._require_config()
        with open_dict(cfg):
            OmegaConf.update(cfg, key, value)
        logger.debug(f"Parameter set: {key} = {value}")


def load_config(config_name: str = "config",
                overrides: Optional[List[str]] = None,
                config_dir: Optional[Union[str, Path]] = None,
                validate: bool = True) -> DictConfig:
    """Load a configuration with a fresh ``ConfigManager``."""
    return ConfigManager(config_dir).load_config(config_name, overrides, validate)


def get_config() -> Optional[DictConfig]:
    """The most recently loaded configuration, or None."""
    return _global_config


def get_parameter(key: str, default: Any = None) -> Any:
    """Look up a dotted key in the most recently loaded configuration."""
    if _global_config is None:
        logger.warning("No global configuration loaded")
        return default
    return OmegaConf.select(_global_config, key, default=default)
