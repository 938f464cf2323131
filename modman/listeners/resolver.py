"""
Module resolution listener.

Turns a module name into a module instance. A module is a Python module or
package exposing a class named ``Module``; it is looked up first in the
configured module paths, then on the regular import path.
"""

import importlib
import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Any, Optional

from ..core.domain.events import ModuleEvent
from .base import AbstractListener

logger = logging.getLogger(__name__)

MODULE_CLASS_NAME = "Module"
MODULE_NAMESPACE = "modman_modules"


def _is_loaded_from(python_module: ModuleType, path: Path) -> bool:
    origin = getattr(python_module, '__file__', None)
    return origin is not None and Path(origin).resolve() == path.resolve()


class ModuleResolverListener(AbstractListener):
    """Resolve module names to instances of their ``Module`` class."""

    def __call__(self, event: ModuleEvent) -> Optional[Any]:
        module_name = event.module_name
        if not module_name:
            return None

        python_module = self._find_in_module_paths(module_name)
        if python_module is None:
            python_module = self._import(module_name)
        if python_module is None:
            logger.debug(f"No Python module found for {module_name}")
            return None

        module_class = getattr(python_module, MODULE_CLASS_NAME, None)
        if not inspect.isclass(module_class):
            logger.debug(f"{python_module.__name__} has no {MODULE_CLASS_NAME} class")
            return None

        logger.debug(f"Resolved module {module_name} to {module_class.__qualname__}")
        return module_class()

    def _find_in_module_paths(self, module_name: str) -> Optional[ModuleType]:
        """Load a module from the first module path that contains it."""
        relative = Path(*module_name.split('.'))

        for base in self.options.module_paths:
            package_init = Path(base) / relative / "__init__.py"
            if package_init.is_file():
                return self._load_from_file(module_name, package_init, is_package=True)

            module_file = (Path(base) / relative).with_suffix(".py")
            if module_file.is_file():
                return self._load_from_file(module_name, module_file, is_package=False)

        return None

    def _load_from_file(self, module_name: str, path: Path, is_package: bool) -> ModuleType:
        """
        Load the module at path, reusing an earlier load of the same file.

        A name already taken in sys.modules by another file (for example a
        module path containing logging.py) is loaded under MODULE_NAMESPACE
        instead, leaving the existing module untouched.
        """
        namespaced = f"{MODULE_NAMESPACE}.{module_name}"

        for key in (module_name, namespaced):
            loaded = sys.modules.get(key)
            if loaded is None:
                return self._exec_module(key, path, is_package)
            if _is_loaded_from(loaded, path):
                return loaded

        return self._exec_module(namespaced, path, is_package)

    def _exec_module(self, key: str, path: Path, is_package: bool) -> ModuleType:
        locations = [str(path.parent)] if is_package else None
        spec = importlib.util.spec_from_file_location(
            key, path, submodule_search_locations=locations)
        if not spec or not spec.loader:
            raise ImportError(f"Cannot load module {key} from {path}")

        python_module = importlib.util.module_from_spec(spec)
        sys.modules[key] = python_module
        try:
            spec.loader.exec_module(python_module)
        except BaseException:
            del sys.modules[key]
            raise

        logger.debug(f"Loaded {key} from {path}")
        return python_module

    def _import(self, module_name: str) -> Optional[ModuleType]:
        try:
            return importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            # Only a missing module itself means "not resolvable"; a missing
            # import inside the module is a real error.
            if e.name and (e.name == module_name or module_name.startswith(e.name + '.')):
                return None
            raise
