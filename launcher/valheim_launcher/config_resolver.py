from __future__ import annotations
import os
from typing import Mapping, Optional

class ConfigResolver:
    """
    Reads named configuration values from an explicit mapping.

    The mapping is consulted on every call, so passing ``os.environ`` keeps
    results in step with the live process environment. Empty values count as
    unset and fall back to the caller's default.
    """

    def __init__(self, values: Mapping[str, str]):
        self.values = values

    @classmethod
    def from_environ(cls) -> "ConfigResolver":
        return cls(os.environ)

    def lookup(self, name: str) -> Optional[str]:
        value = self.values.get(name)
        if value is None or value == "":
            return None
        return value

    def resolve(self, name: str, default: str) -> str:
        value = self.lookup(name)
        return default if value is None else value
