"""
sgdkgen Config Models - Pydantic models for the project descriptor and sgdkgen.yaml

The descriptor is the validated {name, target directory} pair for one run.
GeneratorConfig holds the knobs that end up in the generated files: where the
toolchain lives relative to the project, which emulator `make run` launches,
and where the boot assets are copied from.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from sgdkgen.errors import ConfigError, InvalidProjectNameError


# ═══════════════════════════════════════════════════════════════════════════
# CONSTANTS
# ═══════════════════════════════════════════════════════════════════════════

DEFAULT_SGDK_PATH = "../sgdk"
DEFAULT_MARSDEV_PATH = "../m68k-gcc-toolchain/work"
DEFAULT_EMULATOR = "fusion"
DEFAULT_TEMPLATE_DIRNAME = "test_program"

_VALID_CHARS = re.compile(r"[A-Za-z0-9_-]+")
_VALID_START = re.compile(r"^[A-Za-z_]")


# ═══════════════════════════════════════════════════════════════════════════
# NAME VALIDATION
# ═══════════════════════════════════════════════════════════════════════════


def validate_project_name(name: str) -> str:
    """
    Check a candidate project name against ^[A-Za-z_][A-Za-z0-9_-]*$.

    Args:
        name: Candidate name as typed by the user

    Returns:
        The name, unchanged

    Raises:
        InvalidProjectNameError: naming the first rule the name breaks
    """
    if not name:
        raise InvalidProjectNameError("Project name cannot be empty")
    if not _VALID_CHARS.fullmatch(name):
        raise InvalidProjectNameError(
            "Project name can only contain letters, numbers, underscores, and hyphens"
        )
    if not _VALID_START.match(name):
        raise InvalidProjectNameError("Project name must start with a letter or underscore")
    return name


# ═══════════════════════════════════════════════════════════════════════════
# PROJECT DESCRIPTOR
# ═══════════════════════════════════════════════════════════════════════════


class ProjectDescriptor(BaseModel):
    """
    Validated name and target directory for one generation run.

    Constructing it directly with a bad name raises pydantic's
    ValidationError; use create() to get InvalidProjectNameError instead.
    """

    name: str
    target_directory: Path = Field(default_factory=Path.cwd)

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return validate_project_name(v)

    @field_validator("target_directory")
    @classmethod
    def resolve_target(cls, v: Path) -> Path:
        return Path(v).expanduser().resolve()

    @classmethod
    def create(cls, name: str, target_directory: str | Path = ".") -> "ProjectDescriptor":
        """
        Build a descriptor, raising InvalidProjectNameError for a bad name.
        """
        validate_project_name(name)
        return cls(name=name, target_directory=Path(target_directory))

    @property
    def project_path(self) -> Path:
        return self.target_directory / self.name


# ═══════════════════════════════════════════════════════════════════════════
# GENERATOR CONFIG
# ═══════════════════════════════════════════════════════════════════════════


class ToolchainPaths(BaseModel):
    """Toolchain locations as seen from inside the generated project"""

    sgdk: str = DEFAULT_SGDK_PATH
    marsdev: str = DEFAULT_MARSDEV_PATH


class GeneratorConfig(BaseModel):
    """Contents of sgdkgen.yaml"""

    toolchain: ToolchainPaths = ToolchainPaths()
    template_dir: Path | None = Field(None, alias="templateDir")
    emulator: str = DEFAULT_EMULATOR

    model_config = {"populate_by_name": True}

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "GeneratorConfig":
        """Parse YAML content into GeneratorConfig"""
        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Config must be a mapping")

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(str(e)) from e

    @classmethod
    def from_file(cls, path: str | Path) -> "GeneratorConfig":
        """
        Load config from a YAML file.

        A relative templateDir is taken relative to the file, not the cwd.
        """
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e.strerror or e}") from e

        config = cls.from_yaml(content)
        if config.template_dir is not None and not config.template_dir.is_absolute():
            config.template_dir = (path.parent / config.template_dir).resolve()
        return config

    def to_yaml(self) -> str:
        """Export config to YAML"""
        data: dict[str, Any] = self.model_dump(by_alias=True, exclude_none=True, mode="json")
        return yaml.dump(data, default_flow_style=False, sort_keys=False)

    def override(
        self,
        template_dir: Path | None = None,
        sgdk_path: str | None = None,
        marsdev_path: str | None = None,
        emulator: str | None = None,
    ) -> "GeneratorConfig":
        """Return a copy with the given (non-None) values replaced."""
        toolchain = self.toolchain.model_copy(update={
            k: v for k, v in (("sgdk", sgdk_path), ("marsdev", marsdev_path)) if v is not None
        })
        update: dict[str, Any] = {"toolchain": toolchain}
        if template_dir is not None:
            update["template_dir"] = Path(template_dir).expanduser().resolve()
        if emulator is not None:
            update["emulator"] = emulator
        return self.model_copy(update=update)

    def resolve_template_dir(self, target_directory: Path) -> Path:
        """Boot asset source: templateDir if set, else <target>/test_program."""
        if self.template_dir is not None:
            return self.template_dir
        return target_directory / DEFAULT_TEMPLATE_DIRNAME
