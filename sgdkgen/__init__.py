"""
sgdkgen - SGDK/Marsdev project generator

Scaffolds Sega Genesis / Mega Drive homebrew projects: directory layout,
boot files, Makefile wired to the Marsdev toolchain, and a Hello World main.c.
"""

__version__ = "0.1.0"

from sgdkgen.config import GeneratorConfig, ProjectDescriptor, ToolchainPaths, validate_project_name
from sgdkgen.generator import GenerationResult, ProjectGenerator, generate_project

__all__ = [
    "GeneratorConfig",
    "ProjectDescriptor",
    "ToolchainPaths",
    "validate_project_name",
    "GenerationResult",
    "generate_project",
    "ProjectGenerator",
]
