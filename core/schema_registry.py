# core/schema_registry.py
"""
Schema installer registry.

Modules under schemas/ decorate their installer with @register("name");
auto_discover() imports them and run_all() installs every registered schema.
Installers must be idempotent (CREATE TABLE IF NOT EXISTS ...).
"""
from __future__ import annotations

import importlib
import logging
import pkgutil
from typing import Callable, Dict, Optional, Union

from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

Installer = Callable[[Engine], None]

_REGISTRY: Dict[str, Installer] = {}


def register(name_or_func: Union[str, Installer, None] = None):
    """Usable as @register, @register() or @register("name")."""
    def _decorate(func: Installer, name: Optional[str] = None) -> Installer:
        key = name or f"{func.__module__}.{func.__name__}"
        _REGISTRY[key] = func
        return func

    if callable(name_or_func):
        return _decorate(name_or_func)

    def _wrapper(func: Installer) -> Installer:
        return _decorate(func, name_or_func)
    return _wrapper


def registered() -> Dict[str, Installer]:
    return dict(_REGISTRY)


def auto_discover(package: str = "schemas") -> list[str]:
    """Import every module in `package` so their @register calls run."""
    pkg = importlib.import_module(package)
    loaded = []
    for info in pkgutil.iter_modules(pkg.__path__):
        module_name = f"{package}.{info.name}"
        importlib.import_module(module_name)
        loaded.append(module_name)
    logger.debug("Discovered schema modules: %s", loaded)
    return loaded


def run_all(engine: Engine) -> None:
    for name, installer in _REGISTRY.items():
        logger.info("Installing schema: %s", name)
        installer(engine)
