from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers bound to streams that CliRunner has already closed."""
    yield
    logger = logging.getLogger("notary_entrypoint")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def fake_server_dir(tmp_path: Path) -> Path:
    """Directory holding a stub ``notary-server`` that echoes its argv."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "notary-server"
    script.write_text(
        "#!/bin/sh\n"
        'echo "notary-server called with: $*"\n'
        'exit "${FAKE_SERVER_EXIT:-0}"\n',
        encoding="utf-8",
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return bin_dir


@pytest.fixture
def posix_only():
    if os.name != "posix":
        pytest.skip("process image replacement requires POSIX")
