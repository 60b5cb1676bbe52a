"""
Rule configuration files.

Loads field declarations and messages from YAML into a RuleBuilder.
"""

from pathlib import Path
from typing import Any

import yaml

from rulebound.core.exceptions import ConfigurationError

from .rule_builder import RuleBuilder


class RuleConfigLoader:
    """
    Loads field declarations from YAML configuration files.

    Expected YAML format:
    ```yaml
    fields:
      name: "required|string|max:120"
      email:
        rules: "required|email|unique:users"
        attribute: "email address"
      role_id: "required|integer|exists:roles,id"

    messages:
      email.unique: "That address is already registered."
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the rule config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule configuration file not found: {config_path}")

    def load(self, builder: RuleBuilder | None = None) -> RuleBuilder:
        """
        Declare every configured field on a builder.

        Args:
            builder: Builder to populate; pass one with a bound instance
                     already set for update scenarios

        Returns:
            The populated builder

        Raises:
            ConfigurationError: If the YAML is invalid or malformed
        """
        try:
            with open(self.config_path) as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not isinstance(config, dict) or "fields" not in config:
            raise ConfigurationError("Configuration file must contain a 'fields' section")

        fields = config["fields"]
        if not isinstance(fields, dict) or not fields:
            raise ConfigurationError("'fields' must map field names to rules")

        builder = builder or RuleBuilder()
        for field_name, definition in fields.items():
            rule_spec, attribute = self._parse_field(str(field_name), definition)
            builder.declare_field(str(field_name), rule_spec, attribute)

        messages = config.get("messages") or {}
        if not isinstance(messages, dict):
            raise ConfigurationError("'messages' must map keys to message templates")
        if messages:
            builder.set_messages({str(key): str(value) for key, value in messages.items()})

        return builder

    def _parse_field(self, field_name: str, definition: Any) -> tuple[str, str | None]:
        """
        Parse a single field definition.

        Returns:
            (rule spec string, attribute or None)
        """
        if isinstance(definition, str):
            return definition, None

        if isinstance(definition, list):
            return "|".join(str(rule) for rule in definition), None

        if isinstance(definition, dict):
            if "rules" not in definition:
                raise ConfigurationError(f"Field '{field_name}' is missing 'rules'")
            rules = definition["rules"]
            if isinstance(rules, list):
                rules = "|".join(str(rule) for rule in rules)
            attribute = definition.get("attribute")
            if attribute is not None and not isinstance(attribute, str):
                raise ConfigurationError(f"Field '{field_name}' attribute must be a string, got {attribute!r}")
            return str(rules), attribute

        raise ConfigurationError(f"Field '{field_name}' must be a rule string, a list or a mapping")
