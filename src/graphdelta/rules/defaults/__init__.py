"""Ruleset shipped with the package."""

from pathlib import Path

DEFAULT_RULES_PATH = Path(__file__).parent / "default_rules.yaml"
