"""
Lookup of the external RPM tooling the reviewer shells out to.
"""

from pathlib import Path
import shutil

from .exceptions import ToolNotFoundError


def find_tool(tool_name: str) -> Path | None:
    """Returns the resolved path of *tool_name* on PATH, if any."""
    found = shutil.which(tool_name)
    return Path(found) if found else None


def require_tool(tool_name: str) -> Path:
    """
    Ensures an external tool is installed, returning its path.
    """
    tool_path = find_tool(tool_name)
    if tool_path is None:
        raise ToolNotFoundError(
            f"'{tool_name}' not found in PATH. Please install it."
        )
    return tool_path
