"""
Environment variable loading for the BloomSphere client.
"""
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def load_env(env_file: Optional[str] = None) -> bool:
    """
    Load environment variables from a .env file.

    Values in the file override variables already present in the process
    environment. A missing file is not an error.

    Args:
        env_file: Path to the .env file. Defaults to .env in the current directory.

    Returns:
        True if a file was found and loaded, False otherwise
    """
    env_path = Path(env_file) if env_file else Path(os.getcwd()) / ".env"

    if not env_path.is_file():
        return False

    return load_dotenv(dotenv_path=env_path, override=True)
