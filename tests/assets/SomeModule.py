from modman.core.interfaces.features import ConfigProvider


class Module(ConfigProvider):

    def get_config(self):
        return {'some': 'thing', 'handlers': ['some']}
