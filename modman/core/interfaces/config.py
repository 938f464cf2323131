"""
Configuration merger interface.
"""

from abc import abstractmethod
from typing import Any, Dict

from .events import IListenerAggregate


class IConfigMerger(IListenerAggregate):
    """Listener aggregate that merges module configuration."""

    @abstractmethod
    def get_merged_config(self) -> Dict[str, Any]:
        """
        Get the merged configuration.

        Returns:
            Merged configuration dictionary
        """
        pass

    @abstractmethod
    def set_merged_config(self, config: Dict[str, Any]) -> 'IConfigMerger':
        """
        Replace the merged configuration.

        Args:
            config: Configuration dictionary
        """
        pass
