"""Configuration classes for truth adapters.

This module defines the base configuration record shared by every adapter
and helpers for loading adapter definitions from JSON or YAML files.
"""

import dataclasses
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Type, TypeVar, Union

from rotalabs_truth.core.exceptions import ConfigurationError

try:
    import yaml

    YAML_AVAILABLE = True
except ImportError:
    YAML_AVAILABLE = False

C = TypeVar("C", bound="AdapterConfig")


@dataclass(frozen=True)
class AdapterConfig:
    """Identifies an adapter instance.

    Adapter-specific configs subclass this and add their own parameters.
    Instances are immutable; a new configuration means a new configure() call.

    Attributes:
        id: Stable identifier.
        name: Display name.
    """

    id: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {f.name: getattr(self, f.name) for f in dataclasses.fields(self)}

    @classmethod
    def from_dict(cls: Type[C], data: Dict[str, Any]) -> C:
        """Create config from dictionary.

        Unknown keys are ignored so that a definition can carry extra
        fields (such as ``type``) used by the registry.

        Raises:
            ConfigurationError: If a required field is missing.
        """
        known = {f.name for f in dataclasses.fields(cls) if f.init}
        missing = [
            f.name
            for f in dataclasses.fields(cls)
            if f.init
            and f.name not in data
            and f.default is dataclasses.MISSING
            and f.default_factory is dataclasses.MISSING
        ]
        if missing:
            raise ConfigurationError(f"{cls.__name__} missing required fields: {', '.join(missing)}")
        return cls(**{key: value for key, value in data.items() if key in known})

    def replace(self: C, **changes: Any) -> C:
        """Return a copy of this config with the given fields replaced."""
        return dataclasses.replace(self, **changes)


def load_definition(path: Union[str, Path]) -> Dict[str, Any]:
    """Load an adapter definition from a JSON or YAML file.

    Args:
        path: Path to definition file (.json or .yaml/.yml).

    Returns:
        Parsed definition dictionary.

    Raises:
        ConfigurationError: If the file format is unsupported or the
            document is not a mapping.
        ImportError: If a YAML file is given but PyYAML is not installed.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    with open(path, "r", encoding="utf-8") as f:
        if suffix == ".json":
            data = json.load(f)
        elif suffix in (".yaml", ".yml"):
            if not YAML_AVAILABLE:
                raise ImportError("PyYAML is required to load YAML files. Install with: pip install pyyaml")
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
        else:
            raise ConfigurationError(f"Unsupported file format: {suffix}. Use .json, .yaml, or .yml")

    if not isinstance(data, dict):
        raise ConfigurationError(f"Adapter definition in {path} must be a mapping")
    return data
