"""Errors raised while wiring the application together."""


class UtilError(Exception):
    """Base error for utility and wiring helpers."""

    pass


class ConfigurationError(UtilError):
    """A setting names something the application cannot build."""

    def __init__(self, setting: str, value: object):
        self.setting = setting
        self.value = value
        super().__init__(f"Unsupported value for {setting}: {value!r}")
