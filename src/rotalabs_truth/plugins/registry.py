"""Registry of adapter types for building adapters from definitions.

A definition is a plain dictionary, typically loaded from JSON or YAML::

    type: chain
    id: birthday
    name: Birthday today
    transform: myproject.transforms:birthday_to_date
    source:
      type: html
      id: source-html
      name: Source HTML
      url: https://example.com/person
      regex: '<span class="bday">(.*?)</span>'
    target:
      type: date
      id: target-date
      name: Target Date
      target_date: "2000-01-01"
      recurring_yearly: true

Chains nest: ``source`` and ``target`` may themselves be chains.
"""

import importlib
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from rotalabs_truth.adapters.constant import ConstantAdapter, ConstantAdapterConfig
from rotalabs_truth.adapters.date import DateAdapter, DateAdapterConfig
from rotalabs_truth.adapters.html import HTMLAdapter, HTMLAdapterConfig
from rotalabs_truth.adapters.numeric import NumericRangeAdapter, NumericRangeAdapterConfig
from rotalabs_truth.adapters.selector import SelectorAdapter, SelectorAdapterConfig
from rotalabs_truth.core.adapter import TruthAdapter
from rotalabs_truth.core.chain import ChainedAdapter, ChainedAdapterConfig
from rotalabs_truth.core.config import AdapterConfig
from rotalabs_truth.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CHAIN_TYPE = "chain"


class AdapterRegistry:
    """Registry mapping type names to adapter and config classes.

    Attributes:
        _types: Dictionary mapping type names to (adapter factory, config class).
    """

    def __init__(self, include_builtins: bool = True):
        """Initialize registry.

        Args:
            include_builtins: Register the bundled adapter types.
        """
        self._types: Dict[str, Tuple[Callable[[], TruthAdapter], Type[AdapterConfig]]] = {}
        if include_builtins:
            self.register("constant", ConstantAdapter, ConstantAdapterConfig)
            self.register("numeric_range", NumericRangeAdapter, NumericRangeAdapterConfig)
            self.register("date", DateAdapter, DateAdapterConfig)
            self.register("html", HTMLAdapter, HTMLAdapterConfig)
            self.register("selector", SelectorAdapter, SelectorAdapterConfig)
        logger.debug("Initialized AdapterRegistry")

    def register(
        self,
        type_name: str,
        adapter_factory: Callable[[], TruthAdapter],
        config_class: Type[AdapterConfig],
    ) -> None:
        """Register an adapter type.

        Args:
            type_name: Name used in the ``type`` field of definitions.
            adapter_factory: Zero-argument callable returning a new adapter,
                usually the adapter class.
            config_class: AdapterConfig subclass built from definitions.

        Raises:
            ConfigurationError: If type_name is reserved for chains.
        """
        if type_name == CHAIN_TYPE:
            raise ConfigurationError(f"'{CHAIN_TYPE}' is reserved for chained adapters")

        if type_name in self._types:
            logger.warning(f"Adapter type '{type_name}' already registered, overwriting")

        self._types[type_name] = (adapter_factory, config_class)
        logger.debug(f"Registered adapter type: {type_name}")

    def list_types(self) -> List[Dict[str, str]]:
        """List registered adapter types.

        Returns:
            List of dictionaries containing type name and config class name.
        """
        types = [{"type": name, "config": config_class.__name__} for name, (_, config_class) in self._types.items()]
        types.append({"type": CHAIN_TYPE, "config": ChainedAdapterConfig.__name__})
        return types

    def build(self, definition: Dict[str, Any]) -> Tuple[TruthAdapter, AdapterConfig]:
        """Create an unconfigured adapter and its config from a definition.

        Args:
            definition: Adapter definition dictionary.

        Returns:
            Tuple of (adapter, config). Call ``adapter.configure(config)``
            before evaluating.

        Raises:
            ConfigurationError: If the definition is malformed, names an
                unknown type, or references an unresolvable transform.
        """
        if not isinstance(definition, dict):
            raise ConfigurationError(f"Adapter definition must be a mapping, got {type(definition).__name__}")

        type_name = definition.get("type")
        if not type_name:
            raise ConfigurationError(f"Adapter definition {definition.get('id', '<unnamed>')} has no type")

        if type_name == CHAIN_TYPE:
            return self._build_chain(definition)

        if type_name not in self._types:
            raise ConfigurationError(f"Unknown adapter type: {type_name}")

        adapter_factory, config_class = self._types[type_name]
        return adapter_factory(), config_class.from_dict(definition)

    def _build_chain(self, definition: Dict[str, Any]) -> Tuple[TruthAdapter, AdapterConfig]:
        for key in ("id", "name", "source", "target"):
            if key not in definition:
                raise ConfigurationError(f"Chain definition missing required field: {key}")

        source_adapter, source_config = self.build(definition["source"])
        target_adapter, target_config = self.build(definition["target"])

        transform = None
        if definition.get("transform"):
            transform = load_transform(definition["transform"])

        config = ChainedAdapterConfig(
            id=definition["id"],
            name=definition["name"],
            source_adapter=source_adapter,
            target_adapter=target_adapter,
            source_config=source_config,
            target_config=target_config,
            transform_result=transform,
        )
        return ChainedAdapter(), config


def load_transform(path: str) -> Callable:
    """Resolve a transform function from a ``module:attribute`` path.

    Args:
        path: Import path such as ``"myproject.transforms:birthday_to_date"``.

    Returns:
        The referenced callable.

    Raises:
        ConfigurationError: If the path is malformed, cannot be imported,
            or does not name a callable.
    """
    module_path, sep, attr_path = path.partition(":")
    if not sep or not module_path or not attr_path:
        raise ConfigurationError(f"Transform must be given as 'module:function', got {path!r}")

    logger.debug(f"Loading transform: {attr_path} from {module_path}")

    try:
        target = importlib.import_module(module_path)
    except ImportError as e:
        raise ConfigurationError(f"Failed to import module {module_path}: {e}") from e

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as e:
            raise ConfigurationError(f"{attr_path} not found in {module_path}") from e

    if not callable(target):
        raise ConfigurationError(f"Transform {path} is not callable")
    return target


async def build_adapter(definition: Dict[str, Any], registry: Optional[AdapterRegistry] = None) -> TruthAdapter:
    """Build and configure an adapter from a definition.

    Args:
        definition: Adapter definition dictionary.
        registry: Registry to resolve types with. Defaults to the built-ins.

    Returns:
        Configured adapter, ready to evaluate.
    """
    registry = registry or AdapterRegistry()
    adapter, config = registry.build(definition)
    await adapter.configure(config)
    logger.info(f"Built adapter {config.id} ({definition['type']})")
    return adapter
