"""Read-only view of the process environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class EnvironmentSnapshot:
    """Immutable copy of environment variables taken once at startup."""

    variables: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "variables", MappingProxyType(dict(self.variables)))

    @classmethod
    def capture(cls, environ: Mapping[str, str] | None = None) -> "EnvironmentSnapshot":
        """Snapshot ``environ`` (defaults to ``os.environ``)."""
        return cls(os.environ if environ is None else environ)

    def get(self, name: str) -> str:
        """Return the value of ``name``, or an empty string when unset."""
        return self.variables.get(name, "")

    def expand_user(self, path: str | os.PathLike[str]) -> Path:
        """Expand a leading ``~`` against this snapshot's ``HOME``.

        A set but empty ``HOME`` expands to an empty prefix, as ``sh`` does.
        Only an unset ``HOME`` falls back to the user's home directory.
        """
        raw = os.fspath(path)
        if raw != "~" and not raw.startswith("~/"):
            return Path(raw)
        home = self.variables.get("HOME")
        prefix = str(Path.home()) if home is None else home
        return Path(prefix + raw[1:])


__all__ = ["EnvironmentSnapshot"]
