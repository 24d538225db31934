"""
Configuration Management

Loads configuration from .env files and provides typed config objects.
Handles the default page background, font search paths, skipped tags
and log level.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .models import Config


def load_config(env_file: Optional[Path] = None) -> Config:
    """
    Load configuration from .env file and environment variables.

    Searches for .env file in:
    1. Provided env_file path
    2. Current directory
    3. User's home directory

    Environment variables override .env file values.

    Args:
        env_file: Optional path to .env file

    Returns:
        Config object with all settings

    Raises:
        pydantic.ValidationError: If a setting has an invalid value

    Example:
        config = load_config()
        evaluator = ContrastEvaluator(config)
    """
    if env_file and env_file.exists():
        load_dotenv(env_file)
    elif Path(".env").exists():
        load_dotenv(".env")
    elif (Path.home() / ".env").exists():
        load_dotenv(Path.home() / ".env")

    settings = {
        "default_background": os.getenv("CONTRAST_DEFAULT_BACKGROUND"),
        "log_level": os.getenv("CONTRAST_LOG_LEVEL"),
    }

    font_dirs = os.getenv("CONTRAST_FONT_DIRS")
    if font_dirs:
        settings["font_dirs"] = [d for d in font_dirs.split(os.pathsep) if d]

    skipped_tags = os.getenv("CONTRAST_SKIPPED_TAGS")
    if skipped_tags is not None:
        settings["skipped_tags"] = skipped_tags.split(",")

    return Config(**{k: v for k, v in settings.items() if v is not None})
