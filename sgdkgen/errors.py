"""
sgdkgen errors

Every failure the generator can report is a GeneratorError. The CLI turns
them into a red message and exit code 1; anything else is a bug.
"""

from __future__ import annotations

from pathlib import Path


class GeneratorError(Exception):
    """Base class for all generator failures."""

    hint: str | None = None


class InvalidProjectNameError(GeneratorError, ValueError):
    """Project name does not match ^[A-Za-z_][A-Za-z0-9_-]*$."""


class TargetDirectoryError(GeneratorError):
    """Target directory is missing, not a directory, or not writable."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class ProjectExistsError(GeneratorError):
    """The project directory is already there."""

    hint = "Please choose a different name or remove the existing directory"

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Project directory already exists: {path}")


class TemplateDirectoryNotFoundError(GeneratorError):
    hint = "Pass --template-dir or put test_program/ (with boot/) in the target directory"

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Template directory not found: {path}")


class ProjectCreationError(GeneratorError):
    """Filesystem failure after the project directory was started."""

    def __init__(self, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to create project at {path}: {cause}")


class ConfigError(GeneratorError):
    """Config file missing or malformed."""


class ToolNotFoundError(GeneratorError):
    """An external program (make, emulator) is not on PATH."""

    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(f"{tool} not found on PATH")
