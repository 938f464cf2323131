"""
Exception hierarchy for module loading.

Every error raised by the module manager and its default listeners derives
from ModuleManagerException so callers can catch the whole family at once.
"""


class ModuleManagerException(Exception):
    """Base exception for module manager errors."""
    pass


class InvalidModulesException(ModuleManagerException, TypeError):
    """Raised when the configured module list is not a sequence or mapping."""
    pass


class ModuleStateException(ModuleManagerException, RuntimeError):
    """Raised when an operation is not allowed in the current lifecycle state."""
    pass


class ModuleResolutionException(ModuleManagerException, RuntimeError):
    """Raised when no resolver produced a module instance for a name."""

    def __init__(self, module_name: str) -> None:
        super().__init__(f"Module ({module_name}) could not be initialized.")
        self.module_name = module_name


class ModuleIdentityException(ModuleManagerException, RuntimeError):
    """Raised when a configured module entry cannot be given a string name."""
    pass


class MissingDependencyModuleException(ModuleManagerException, RuntimeError):
    """Raised when a module depends on a module that has not been loaded."""

    def __init__(self, module_name: str, dependency: str) -> None:
        super().__init__(
            f'Module "{module_name}" depends on module "{dependency}", which was not loaded')
        self.module_name = module_name
        self.dependency = dependency


class ConfigMergeException(ModuleManagerException):
    """Raised when module configuration cannot be read, merged or cached."""
    pass
