from modman.core.interfaces.features import DependencyIndicator


class Module(DependencyIndicator):

    def get_module_dependencies(self):
        return ['SomeModule']
