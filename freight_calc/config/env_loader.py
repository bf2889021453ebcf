"""Centralized environment variable loading utility."""

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def load_environment_variables(project_dir: Optional[Path] = None) -> bool:
    """Load environment variables from a .env file.

    Checks for a .env file in the parent of the project directory first,
    then in the project directory itself. Variables already present in the
    process environment are not overridden.

    Args:
        project_dir: Project root directory. Defaults to the repository root.

    Returns:
        True if a .env file was found and loaded
    """
    if project_dir is None:
        # freight_calc/config/ -> freight_calc/ -> project root
        project_dir = Path(__file__).parent.parent.parent

    for env_file in (project_dir.parent / ".env", project_dir / ".env"):
        if env_file.exists():
            return load_dotenv(env_file)
    return False
