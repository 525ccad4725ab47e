"""Fixed settings for the notary-server entrypoint.

None of these values are user-configurable. ``LauncherConfig`` exists so
the decision logic can be exercised with alternate values in tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

DEV_MODE_VALUE = "dev"


@dataclass(frozen=True)
class LauncherConfig:
    """Names and paths the entrypoint relies on."""

    mode_variable: str = "ENV"
    # Only read in development mode.
    credential_variable: str = "AIRDROP_SERVER_AUTH"
    dev_mode_value: str = DEV_MODE_VALUE
    executable: str = "notary-server"
    config_flag: str = "--config-file"
    config_dir: PurePosixPath = PurePosixPath("~/.notary-server/config")
    dev_config_name: str = "config_dev.yml"
    prod_config_name: str = "config_prod.yml"
    log_level_variable: str = "NOTARY_ENTRYPOINT_LOG_LEVEL"
    default_log_level: str = "WARNING"


DEFAULT_CONFIG = LauncherConfig()

__all__ = ["DEFAULT_CONFIG", "DEV_MODE_VALUE", "LauncherConfig"]
