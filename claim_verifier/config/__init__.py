"""Configuration: settings, logging, credibility tables and prompts."""

from claim_verifier.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
