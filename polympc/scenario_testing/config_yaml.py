"""
Loading of YAML scenario and controller configuration.
"""

import logging

import yaml

from polympc.core.actuation.config import MPCConfig
from polympc.core.actuation.errors import ConfigError

logger = logging.getLogger(__name__)


def load_yaml(file):
    """
    Load a YAML configuration file.

    Args:
        file (str or pathlib.Path): Path to the YAML file.
    Returns:
        dict: Parsed document; an empty file gives an empty dict.
    """
    with open(file, "r") as stream:
        try:
            params = yaml.safe_load(stream)
        except yaml.YAMLError as exc:
            raise ConfigError(f"failed to parse {file}: {exc}") from exc
    if params is None:
        return {}
    if not isinstance(params, dict):
        raise ConfigError(f"{file} must contain a mapping at the top level")
    logger.debug(f"Loaded configuration from {file}")
    return params


def load_mpc_config(file):
    """MPCConfig from the ``controller.args`` section, or from the document root."""
    params = load_yaml(file)
    if "controller" not in params:
        return MPCConfig.from_dict(params)
    controller = params["controller"] or {}
    if not isinstance(controller, dict):
        raise ConfigError(f"{file}: controller section must be a mapping")
    return MPCConfig.from_dict(controller.get("args") or {})
