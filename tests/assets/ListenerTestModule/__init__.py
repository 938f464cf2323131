from modman.core.interfaces.features import (
    BootstrapListener, ConfigProvider, InitProvider, LocatorRegistered
)


class Module(InitProvider, ConfigProvider, BootstrapListener, LocatorRegistered):

    def __init__(self):
        self.init_called = False
        self.get_config_called = False
        self.on_bootstrap_called = False

    def init(self, module_manager=None):
        self.init_called = True

    def get_config(self):
        self.get_config_called = True
        return {'listener': 'test'}

    def on_bootstrap(self, event):
        self.on_bootstrap_called = True
