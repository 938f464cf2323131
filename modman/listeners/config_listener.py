"""
Configuration merging listener.

Collects configuration fragments from ConfigProvider modules and from
configuration files, merges them once every module has loaded, and
optionally caches the result so later runs can skip merging entirely.
"""

import glob
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..core.domain.events import ModuleEvent, ModuleEvents
from ..core.exceptions import ConfigMergeException
from ..core.interfaces.config import IConfigMerger
from ..core.interfaces.events import IEventManager, DEFAULT_PRIORITY
from ..core.interfaces.features import ConfigProvider
from ..infrastructure.config.loader import ConfigLoader, merge_configs
from ..infrastructure.config.models import ListenerOptions
from .base import AbstractListener

logger = logging.getLogger(__name__)

GLOB_PATH = "glob_path"
STATIC_PATH = "static_path"


class ConfigListener(AbstractListener, IConfigMerger):
    """
    Default configuration merger.

    Merge order: ``extra_config`` first, then module configuration in load
    order, then configuration files from static and glob paths. Later
    fragments win; lists are concatenated.
    """

    def __init__(self, options: Optional[ListenerOptions] = None,
                 loader: Optional[ConfigLoader] = None) -> None:
        super().__init__(options)
        self._loader = loader if loader is not None else ConfigLoader()
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._merged_config: Dict[str, Any] = {}
        self._paths: List[Tuple[str, str]] = []
        self._handles: List[Any] = []
        self._skip_config = False

        if self._has_cached_config():
            self._merged_config = self._load_cached_config()
            self._skip_config = True
        else:
            self.add_config_glob_paths(self.options.config_glob_paths)
            self.add_config_static_paths(self.options.config_static_paths)

    @property
    def skip_config(self) -> bool:
        """True when configuration came from the cache and merging is skipped."""
        return self._skip_config

    def attach(self, events: IEventManager, priority: int = DEFAULT_PRIORITY) -> None:
        self._handles.append(events.attach(
            ModuleEvents.LOAD_MODULES, self.on_load_modules_pre, 1000))

        # A cached configuration makes loading and merging unnecessary
        if self._skip_config:
            return

        self._handles.append(events.attach(ModuleEvents.LOAD_MODULE, self.on_load_module))
        self._handles.append(events.attach(
            ModuleEvents.LOAD_MODULES, self.on_load_modules, -1000))
        self._handles.append(events.attach(
            ModuleEvents.MERGE_CONFIG, self.on_merge_config, 1000))

    def detach(self, events: IEventManager) -> None:
        while self._handles:
            events.detach(self._handles.pop())

    def on_load_modules_pre(self, event: ModuleEvent) -> None:
        event.config_listener = self
        # Each load collects its own fragments
        self._configs.clear()

    def on_load_module(self, event: ModuleEvent) -> None:
        module = event.module
        if not isinstance(module, ConfigProvider):
            return

        config = module.get_config()
        self._add_config(event.module_name or '', config)

    def on_load_modules(self, event: ModuleEvent) -> None:
        """Merge path configuration, fire merge-config, then write the cache."""
        for path_type, path in self._paths:
            self._add_config_by_path(path_type, path)

        # merge-config lets listeners adjust the merged config before caching
        original_name = event.name
        event.name = ModuleEvents.MERGE_CONFIG
        event.target.event_manager.trigger_event(event)
        event.name = original_name

        if self.options.config_cache_enabled and not self._skip_config:
            self._write_cache()

    def on_merge_config(self, event: ModuleEvent) -> None:
        merged = dict(self.options.extra_config)
        for config in self._configs.values():
            merged = merge_configs(merged, config, append_lists=True)
        self._merged_config = merged
        logger.debug(f"Merged configuration from {len(self._configs)} sources")

    def get_merged_config(self) -> Dict[str, Any]:
        return self._merged_config

    def set_merged_config(self, config: Dict[str, Any]) -> 'ConfigListener':
        if not isinstance(config, dict):
            raise TypeError(
                f"Merged configuration must be a dictionary, got {type(config).__name__}")
        self._merged_config = config
        return self

    def add_config_glob_paths(self, glob_paths: Iterable[str]) -> 'ConfigListener':
        for path in glob_paths:
            self._paths.append((GLOB_PATH, path))
        return self

    def add_config_static_paths(self, static_paths: Iterable[str]) -> 'ConfigListener':
        for path in static_paths:
            self._paths.append((STATIC_PATH, path))
        return self

    def _add_config(self, key: str, config: Any) -> None:
        if not isinstance(config, dict):
            raise ConfigMergeException(
                f"Config being merged from {key} must be a dictionary, "
                f"got {type(config).__name__}")
        self._configs[key] = config

    def _add_config_by_path(self, path_type: str, path: str) -> None:
        if path_type == GLOB_PATH:
            for match in sorted(glob.glob(path, recursive=True)):
                self._add_config(match, self._read(match))
        else:
            self._add_config(path, self._read(path))

    def _read(self, path: str) -> Dict[str, Any]:
        try:
            return self._loader.load_file(path)
        except (OSError, ValueError) as e:
            raise ConfigMergeException(f"Cannot read configuration from {path}: {e}") from e

    def _has_cached_config(self) -> bool:
        return self.options.config_cache_enabled and self.options.config_cache_file.is_file()

    def _load_cached_config(self) -> Dict[str, Any]:
        cache_file = self.options.config_cache_file
        logger.info(f"Using cached module configuration from {cache_file}")
        return self._read(str(cache_file))

    def _write_cache(self) -> None:
        cache_file: Path = self.options.config_cache_file
        try:
            cache_file.parent.mkdir(parents=True, exist_ok=True)
            self._loader.save_file(self._merged_config, cache_file, "yaml")
        except (OSError, ValueError) as e:
            raise ConfigMergeException(f"Cannot write configuration cache {cache_file}: {e}") from e
        logger.info(f"Wrote module configuration cache to {cache_file}")
