"""Shared pytest fixtures for the sgdkgen test suite.

Provides:
- A marsdev-style workspace with a test_program/ boot asset source
- A logger reset so CLI runs don't leak handlers into later tests
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

SEGA_S = "* Genesis startup stub\n    .org 0x00000000\n"
ROM_HEAD_C = '#include "genesis.h"\n\nconst ROMHeader rom_header = {};\n'


# ---------------------------------------------------------------------------
# Workspace
# ---------------------------------------------------------------------------

@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """test_program/ with both boot assets, inside tmp_path."""
    boot = tmp_path / "test_program" / "boot"
    boot.mkdir(parents=True)
    (boot / "sega.s").write_text(SEGA_S)
    (boot / "rom_head.c").write_text(ROM_HEAD_C)
    return tmp_path / "test_program"


@pytest.fixture
def workspace(tmp_path: Path, template_dir: Path) -> Path:
    """Target directory laid out like a marsdev checkout."""
    return tmp_path


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def reset_sgdkgen_logger():
    yield
    logger = logging.getLogger("sgdkgen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
