"""Configuration loading and validation."""

from .loader import load_config, validate_config, get_config_value, valid_quantiles

__all__ = ["load_config", "validate_config", "get_config_value", "valid_quantiles"]
