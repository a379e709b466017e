"""
sgdkgen Generator - Template-based SGDK/Marsdev project generation

Creates the project skeleton, copies the boot assets from a reference
template directory, and renders the Makefile, main.c and docs through Jinja2.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jinja2 import Environment, PackageLoader, StrictUndefined

from sgdkgen.config import GeneratorConfig, ProjectDescriptor
from sgdkgen.errors import (
    ProjectCreationError,
    ProjectExistsError,
    TargetDirectoryError,
    TemplateDirectoryNotFoundError,
)

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# PROJECT LAYOUT
# ═══════════════════════════════════════════════════════════════════════════

SUBDIRECTORIES = ("boot", "src", "inc", "res")

# Copied verbatim from <template_dir>/boot/
BOOT_ASSETS = ("sega.s", "rom_head.c")

# (template, output path relative to project root)
TEMPLATED_FILES = (
    ("main.c.j2", "main.c"),
    ("Makefile.j2", "Makefile"),
    ("README.md.j2", "README.md"),
    ("gitignore.j2", ".gitignore"),
    ("game.h.j2", "inc/game.h"),
)

PLACEHOLDER_DIRS = ("src", "inc", "res")


# ═══════════════════════════════════════════════════════════════════════════
# GENERATED FILE TRACKING
# ═══════════════════════════════════════════════════════════════════════════


@dataclass
class GeneratedFile:
    """Represents a generated file."""

    path: str  # Relative path from project directory
    content: str
    template: str | None = None


@dataclass
class GenerationResult:
    """Result of project generation."""

    project_path: Path
    directories: list[str] = field(default_factory=list)
    files: list[GeneratedFile] = field(default_factory=list)
    assets: list[str] = field(default_factory=list)  # Copied boot files
    warnings: list[str] = field(default_factory=list)

    @property
    def missing_assets(self) -> list[str]:
        return [f"boot/{name}" for name in BOOT_ASSETS if f"boot/{name}" not in self.assets]

    def get_file(self, path: str) -> GeneratedFile | None:
        return next((f for f in self.files if f.path == path), None)


# ═══════════════════════════════════════════════════════════════════════════
# JINJA ENVIRONMENT SETUP
# ═══════════════════════════════════════════════════════════════════════════


def create_jinja_env() -> Environment:
    """
    Create the Jinja2 environment over the bundled templates.

    No autoescaping; the outputs are C, make and markdown.
    """
    return Environment(
        loader=PackageLoader("sgdkgen", "templates"),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


# ═══════════════════════════════════════════════════════════════════════════
# PROJECT GENERATOR
# ═══════════════════════════════════════════════════════════════════════════


class ProjectGenerator:
    """
    Generates SGDK/Marsdev projects from a ProjectDescriptor.

    One instance can generate any number of projects; it holds only the
    config and the template environment.
    """

    def __init__(self, config: GeneratorConfig | None = None):
        """
        Initialize generator.

        Args:
            config: Toolchain paths, emulator and template dir. Defaults apply when None.
        """
        self.config = config or GeneratorConfig()
        self.env = create_jinja_env()

    def generate(self, descriptor: ProjectDescriptor) -> GenerationResult:
        """
        Generate a project.

        All checks run before the first directory is created. After that,
        a filesystem failure stops the run and leaves what was already
        written in place.

        Args:
            descriptor: Validated project name and target directory

        Returns:
            GenerationResult with directories, files, copied assets and warnings

        Raises:
            TargetDirectoryError: target missing or not writable
            ProjectExistsError: <target>/<name> already exists
            TemplateDirectoryNotFoundError: boot asset source is missing
            ProjectCreationError: mkdir or write failed mid-run
        """
        template_dir = self.check_target(descriptor)
        project_path = descriptor.project_path
        result = GenerationResult(project_path=project_path)

        logger.info("Creating new SGDK project: %s", descriptor.name)
        logger.info("Target directory: %s", project_path)

        try:
            self._create_structure(project_path, result)
            self._copy_boot_assets(template_dir, project_path, result)
            context = self._create_context(descriptor)
            for template, relative_path in TEMPLATED_FILES:
                content = self._render_template(template, context)
                self._write_file(project_path, relative_path, content, result, template)
            self._create_placeholders(project_path, result)
        except OSError as e:
            raise ProjectCreationError(project_path, e) from e

        return result

    def plan(self, descriptor: ProjectDescriptor) -> GenerationResult:
        """Run the checks and render everything in memory; nothing is written."""
        template_dir = self.check_target(descriptor)
        result = GenerationResult(project_path=descriptor.project_path)
        result.directories = ["."] + list(SUBDIRECTORIES)

        context = self._create_context(descriptor)
        for template, relative_path in TEMPLATED_FILES:
            result.files.append(GeneratedFile(
                path=relative_path,
                content=self._render_template(template, context),
                template=template,
            ))
        for name in PLACEHOLDER_DIRS:
            result.files.append(GeneratedFile(path=f"{name}/.gitkeep", content=""))

        for name in BOOT_ASSETS:
            if (template_dir / "boot" / name).is_file():
                result.assets.append(f"boot/{name}")
            else:
                result.warnings.append(self._missing_asset_message(name))

        return result

    def check_target(self, descriptor: ProjectDescriptor) -> Path:
        """
        Run the pre-mutation gates.

        Returns:
            The resolved template directory
        """
        target = descriptor.target_directory
        project_path = descriptor.project_path

        if project_path.exists():
            raise ProjectExistsError(project_path)
        if not target.is_dir():
            raise TargetDirectoryError(target, "Target directory does not exist")
        if not os.access(target, os.W_OK):
            raise TargetDirectoryError(target, "Cannot write to target directory")

        template_dir = self.config.resolve_template_dir(target)
        if not template_dir.is_dir():
            raise TemplateDirectoryNotFoundError(template_dir)
        return template_dir

    def _create_context(self, descriptor: ProjectDescriptor) -> dict[str, Any]:
        """Create template rendering context."""
        return {
            "project_name": descriptor.name,
            "sgdk_path": self.config.toolchain.sgdk,
            "marsdev_path": self.config.toolchain.marsdev,
            "emulator": self.config.emulator,
        }

    def _render_template(
        self,
        template_path: str,
        context: dict[str, Any],
    ) -> str:
        """Render a Jinja2 template."""
        template = self.env.get_template(template_path)
        return template.render(**context)

    def _write_file(
        self,
        project_path: Path,
        relative_path: str,
        content: str,
        result: GenerationResult,
        template: str | None = None,
    ) -> None:
        """Write a generated file and track it."""
        full_path = project_path / relative_path
        full_path.write_text(content, encoding="utf-8")

        result.files.append(GeneratedFile(
            path=relative_path,
            content=content,
            template=template,
        ))
        logger.debug("Created %s", relative_path)

    # ═══════════════════════════════════════════════════════════════════════
    # STRUCTURE AND ASSETS
    # ═══════════════════════════════════════════════════════════════════════

    def _create_structure(self, project_path: Path, result: GenerationResult) -> None:
        """Create the project directory and its four subdirectories."""
        project_path.mkdir()
        result.directories.append(".")

        for name in SUBDIRECTORIES:
            (project_path / name).mkdir()
            result.directories.append(name)

        logger.debug("Project structure created")

    def _copy_boot_assets(
        self,
        template_dir: Path,
        project_path: Path,
        result: GenerationResult,
    ) -> None:
        """Copy boot files; a missing one is a warning, not an error."""
        for name in BOOT_ASSETS:
            source = template_dir / "boot" / name
            if not source.is_file():
                message = self._missing_asset_message(name)
                logger.warning(message)
                result.warnings.append(message)
                continue

            shutil.copy2(source, project_path / "boot" / name)
            result.assets.append(f"boot/{name}")
            logger.debug("Copied boot/%s", name)

    def _create_placeholders(self, project_path: Path, result: GenerationResult) -> None:
        """Empty .gitkeep files so git tracks the otherwise empty folders."""
        for name in PLACEHOLDER_DIRS:
            self._write_file(project_path, f"{name}/.gitkeep", "", result)

    @staticmethod
    def _missing_asset_message(name: str) -> str:
        return f"Template boot/{name} not found, you'll need to copy it manually"


# ═══════════════════════════════════════════════════════════════════════════
# PUBLIC API
# ═══════════════════════════════════════════════════════════════════════════


def generate_project(
    name: str,
    target_directory: str | Path = ".",
    config: GeneratorConfig | None = None,
) -> GenerationResult:
    """
    Generate an SGDK project.

    Args:
        name: Project name, ^[A-Za-z_][A-Za-z0-9_-]*$
        target_directory: Existing, writable parent directory
        config: Optional generator config

    Returns:
        GenerationResult for the new project

    Raises:
        InvalidProjectNameError: bad name; nothing is touched
    """
    descriptor = ProjectDescriptor.create(name, target_directory)

    generator = ProjectGenerator(config)
    return generator.generate(descriptor)
