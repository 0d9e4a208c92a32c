"""Configuration loading helpers."""

from chronofmt.lib.config.settings import FormatterConfig, build_cache, load_config

__all__ = ["FormatterConfig", "build_cache", "load_config"]
