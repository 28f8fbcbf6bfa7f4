# iphits/errors.py
from __future__ import annotations

from typing import Iterable


class IphitsError(Exception):
    """Base class for every failure that stops a run."""


class ConfigError(IphitsError):
    pass


class MissingParameterError(IphitsError):
    def __init__(self, missing: Iterable[str]):
        self.missing = tuple(missing)
        super().__init__(
            "Required parameters are missing: " + ", ".join(self.missing)
        )


class LogFormatError(IphitsError):
    pass


class LogIOError(IphitsError):
    pass
