import logging

from typing import Callable, Dict

from gradfuncs.functions.base import Builder

logger = logging.getLogger(__name__)

# name -> factory; calling the factory with keyword parameters gives a Builder
BuilderFactory = Callable[..., Builder]

_registry: Dict[str, BuilderFactory] = {}
_registry_version: int = 0

def register_builder(name: str, factory: BuilderFactory) -> None:
    global _registry_version
    if name in _registry:
        logger.debug("Replacing builder factory %r", name)
    _registry[name] = factory
    _registry_version += 1
    logger.debug("Registered builder factory %r (registry version %d)", name, _registry_version)

def get_builder(name: str, **params) -> Builder:
    return _registry[name](**params)

def all_builders() -> Dict[str, BuilderFactory]:
    return dict(_registry)

def registry_version() -> int:
    return _registry_version
