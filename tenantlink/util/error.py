"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Raised at startup when settings are unsafe to run with."""

    def __init__(self, setting: str, reason: str):
        self.setting = setting
        super().__init__(f"{setting}: {reason}")
