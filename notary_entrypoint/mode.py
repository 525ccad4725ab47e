"""Mode selection for the notary-server entrypoint.

The decision is a pure mapping from an :class:`EnvironmentSnapshot` to a
:class:`LaunchPlan`: which configuration file to pass to the server and
which status lines to print before handing off.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

from notary_entrypoint.config import DEFAULT_CONFIG, LauncherConfig
from notary_entrypoint.environment import EnvironmentSnapshot

STARTUP_LINE = "Starting entrypoint script"
DEV_MODE_LINE = "🟡 Running in development mode"
PROD_MODE_LINE = "🟢 Running in production mode"


class Mode(str, Enum):
    """Deployment variant the server is launched in."""

    DEV = "dev"
    PROD = "prod"


@dataclass(frozen=True)
class LaunchPlan:
    """Everything needed to print the status lines and start the server."""

    mode: Mode
    config_path: str
    executable: str
    config_flag: str
    # Raw bytes: environment values pass through as the OS delivered them.
    lines: tuple[bytes, ...]

    @property
    def argv(self) -> tuple[str, str, str]:
        return (self.executable, self.config_flag, self.config_path)


def select_mode(
    snapshot: EnvironmentSnapshot, config: LauncherConfig = DEFAULT_CONFIG
) -> Mode:
    """Return ``Mode.DEV`` only for an exact ``dev`` value.

    No case folding or trimming: ``Dev``, ``" dev"`` and ``production``
    all select production, as does an unset variable.
    """
    if snapshot.get(config.mode_variable) == config.dev_mode_value:
        return Mode.DEV
    return Mode.PROD


def config_path_for(
    mode: Mode,
    snapshot: EnvironmentSnapshot,
    config: LauncherConfig = DEFAULT_CONFIG,
) -> str:
    name = config.dev_config_name if mode is Mode.DEV else config.prod_config_name
    return str(snapshot.expand_user(config.config_dir / name))


def _text(line: str) -> bytes:
    return line.encode("utf-8")


def plan_launch(
    snapshot: EnvironmentSnapshot, config: LauncherConfig = DEFAULT_CONFIG
) -> LaunchPlan:
    """Build the launch plan for the given environment snapshot.

    Lines are ordered: the startup announcement, the echo of the mode
    variable, then the mode line. In development mode the credential
    variable is echoed after the mode line.
    """
    mode = select_mode(snapshot, config)
    lines = [
        _text(STARTUP_LINE),
        _text(f"{config.mode_variable} is set to: ")
        + os.fsencode(snapshot.get(config.mode_variable)),
    ]
    if mode is Mode.DEV:
        lines.append(_text(DEV_MODE_LINE))
        # Prints a credential to stdout. Development containers only;
        # never enable this branch for production images.
        lines.append(os.fsencode(snapshot.get(config.credential_variable)))
    else:
        lines.append(_text(PROD_MODE_LINE))

    return LaunchPlan(
        mode=mode,
        config_path=config_path_for(mode, snapshot, config),
        executable=config.executable,
        config_flag=config.config_flag,
        lines=tuple(lines),
    )


__all__ = [
    "DEV_MODE_LINE",
    "LaunchPlan",
    "Mode",
    "PROD_MODE_LINE",
    "STARTUP_LINE",
    "config_path_for",
    "plan_launch",
    "select_mode",
]
