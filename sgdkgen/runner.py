"""
Build and emulator launch for freshly generated projects.

Both steps spawn a child process and wait for it; nothing is left running
after the CLI returns.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from sgdkgen.errors import ToolNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Outcome of one `make` invocation."""

    target: str
    returncode: int
    stdout: str
    stderr: str
    rom_path: Path

    @property
    def success(self) -> bool:
        return self.returncode == 0 and self.rom_path.is_file()


def build_project(project_path: Path, target: str = "release") -> BuildResult:
    """
    Run `make <target>` inside a generated project.

    Args:
        project_path: Root of the generated project (holds the Makefile)
        target: Makefile target, e.g. release or debug

    Returns:
        BuildResult; rom_path points at <name>.bin whether or not it was built

    Raises:
        ToolNotFoundError: make is not installed
    """
    make = shutil.which("make")
    if make is None:
        raise ToolNotFoundError("make")

    logger.info("Running make %s in %s", target, project_path)
    proc = subprocess.run(
        [make, target],
        cwd=project_path,
        capture_output=True,
        text=True,
        check=False,
    )
    if proc.returncode != 0:
        logger.debug("make stderr:\n%s", proc.stderr)

    return BuildResult(
        target=target,
        returncode=proc.returncode,
        stdout=proc.stdout,
        stderr=proc.stderr,
        rom_path=project_path / f"{project_path.name}.bin",
    )


def launch_emulator(rom_path: Path, emulator: str) -> int | None:
    """
    Open a ROM in the emulator and wait for it to exit.

    Returns:
        The emulator's exit code, or None when the emulator is not on PATH
    """
    executable = shutil.which(emulator)
    if executable is None:
        logger.warning("%s emulator not found. ROM ready at: %s", emulator, rom_path)
        return None

    logger.info("Running %s in %s", rom_path.name, emulator)
    proc = subprocess.run([executable, str(rom_path)], check=False)
    return proc.returncode
