"""System dependency checking for the embedded editor mode."""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class Dependency:
    """Represents a required system dependency."""

    name: str
    command: str
    install_hint: str


class DependencyError(Exception):
    """Raised when required dependencies are missing."""

    def __init__(self, missing: List[Dependency]):
        self.missing = missing
        message = self._format_error_message(missing)
        super().__init__(message)

    def _format_error_message(self, missing: List[Dependency]) -> str:
        """Format a user-friendly error message."""
        lines = [
            "Missing required dependencies for embedded mode:",
            "",
        ]

        for dep in missing:
            lines.append(f"  • {dep.name} ({dep.command})")
            lines.append(f"    Install: {dep.install_hint}")

        lines.extend(
            [
                "",
                "Install them, or attach to a running editor by setting "
                "NVIM_SOCKET_PATH and disabling [neovim] embed.",
            ]
        )

        return "\n".join(lines)


def neovim_dependency(command: str = "nvim") -> Dependency:
    """Describe the Neovim binary the embedded mode will spawn."""
    return Dependency(
        name="Neovim",
        command=command,
        install_hint="https://github.com/neovim/neovim/blob/master/INSTALL.md",
    )


def check_command_exists(command: str) -> bool:
    """Check if a command exists in PATH (or is an executable path)."""
    return shutil.which(command) is not None


def get_command_version(command: str, version_arg: str = "--version") -> Optional[str]:
    """Get the first line of a command's version output."""
    try:
        result = subprocess.run(
            [command, version_arg],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode == 0:
            return result.stdout.strip().split("\n")[0]
    except (subprocess.TimeoutExpired, OSError):
        pass
    return None


def check_dependencies_or_raise(dependencies: List[Dependency]) -> None:
    """Raise DependencyError listing every dependency not found on PATH."""
    missing = [dep for dep in dependencies if not check_command_exists(dep.command)]
    if missing:
        raise DependencyError(missing)
