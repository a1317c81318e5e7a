#!/usr/bin/env python3

import os
import json
import shlex
import tomllib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import logging
import sys

import yaml

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("repochangelog")

DEFAULT_LOG_FORMAT = "  * %s"
DEFAULT_MERGE_FORMAT = "  * %s%n%w(64,4,4)%b"
DEFAULT_TITLE = "n.n.n"
DEFAULT_FILENAME = "History.md"

# git config keys that override the file settings
GIT_CONFIG_KEYS = {
    "log_format": "changelog.format",
    "merge_format": "changelog.mergeformat",
    "log_options": "changelog.opts",
}


class MergeFilter(Enum):
    """Which commits the log query keeps."""
    ALL = "all"
    NO_MERGES = "no-merges"
    MERGES_ONLY = "merges-only"


@dataclass(frozen=True)
class ChangelogConfig:
    """
    Settings for one run, built once at startup and never mutated.

    Attributes:
        log_format: git pretty format for ordinary commits
        merge_format: git pretty format used with --merges-only
        log_options: Extra ``git log`` arguments
        merge_filter: Merge commit filter
        default_title: Label of the section newer than every tag
        default_filename: Changelog file created when none exists
        open_editor: Open the result in an editor before replacing the file
        editor: Editor command (None uses $VISUAL/$EDITOR)
    """
    log_format: str = DEFAULT_LOG_FORMAT
    merge_format: str = DEFAULT_MERGE_FORMAT
    log_options: Tuple[str, ...] = ()
    merge_filter: MergeFilter = MergeFilter.ALL
    default_title: str = DEFAULT_TITLE
    default_filename: str = DEFAULT_FILENAME
    open_editor: bool = True
    editor: Optional[str] = None


def get_config_path():
    """Get the path to the configuration file.

    Checks in order:
    1. REPOCHANGELOG_CONFIG environment variable
    2. ~/.repochangelog/ directory
    """
    if 'REPOCHANGELOG_CONFIG' in os.environ:
        path = Path(os.environ['REPOCHANGELOG_CONFIG'])
        if path.exists():
            return path

    config_dir = Path.home() / '.repochangelog'
    for filename in ['config.json', 'config.toml', 'config.yaml', 'config.yml']:
        path = config_dir / filename
        if path.exists():
            return path

    # If no file exists, return default path
    return config_dir / 'config.json'


def load_config():
    """Load configuration from file."""
    config_path = get_config_path()

    # Start with default config
    config = get_default_config()

    # Load from file if it exists
    if config_path.exists():
        try:
            if config_path.suffix.lower() in ['.toml']:
                with open(config_path, 'rb') as f:
                    file_config = tomllib.load(f)
            elif config_path.suffix.lower() in ['.yaml', '.yml']:
                with open(config_path, 'r') as f:
                    file_config = yaml.safe_load(f) or {}
            else:
                # Default to JSON format
                with open(config_path, 'r') as f:
                    file_config = json.load(f)

            # Merge file config with defaults
            config = merge_configs(config, file_config)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Error loading config from {config_path}: {e}")

    # Apply environment variable overrides
    config = apply_env_overrides(config)

    return config


def get_default_config():
    """Get default configuration."""
    return {
        "general": {
            "title": DEFAULT_TITLE,
            "filename": DEFAULT_FILENAME,
            "open_editor": True,
            "editor": "",
        },
        "format": {
            "commit": DEFAULT_LOG_FORMAT,
            "merge": DEFAULT_MERGE_FORMAT,
            "log_options": "",
        },
        "logging": {
            "level": "INFO",
        },
    }


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            # Recursively merge nested dictionaries
            merged[key] = merge_configs(merged[key], value)
        else:
            # Override or add new key
            merged[key] = value

    return merged


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: REPOCHANGELOG_SECTION_KEY
    For example: REPOCHANGELOG_GENERAL_OPEN_EDITOR=false
    """
    env_prefix = "REPOCHANGELOG_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix) or env_key == "REPOCHANGELOG_CONFIG":
            continue

        key_parts = env_key[len(env_prefix):].lower().split('_')

        # Convert value
        if value.lower() in ('true', 'yes', 'on'):
            typed_value = True
        elif value.lower() in ('false', 'no', 'off'):
            typed_value = False
        elif value.isdigit():
            typed_value = int(value)
        else:
            typed_value = value

        current_level = config
        i = 0
        while i < len(key_parts):
            # Find the longest key in current_level that is a prefix of the remaining key_parts
            best_match_len = 0
            matched_key = None

            for config_key in current_level.keys():
                config_key_parts_from_key = config_key.split('_')
                if key_parts[i : i + len(config_key_parts_from_key)] == config_key_parts_from_key:
                    if len(config_key_parts_from_key) > best_match_len:
                        best_match_len = len(config_key_parts_from_key)
                        matched_key = config_key

            if not matched_key:
                break

            if i + best_match_len == len(key_parts):
                current_level[matched_key] = typed_value
                break

            if not isinstance(current_level[matched_key], dict):
                # Path conflict: env var is longer than the config path
                break
            current_level = current_level[matched_key]
            i += best_match_len

    return config


def configure_logging(config: Dict[str, Any], verbose: bool = False) -> None:
    """Set the package log level from the config, or DEBUG when verbose."""
    if verbose:
        level = logging.DEBUG
    else:
        name = str(config.get("logging", {}).get("level", "INFO")).upper()
        level = getattr(logging, name, None)
        if not isinstance(level, int):
            logger.warning(f"Unknown logging level '{name}', using INFO")
            level = logging.INFO
    logger.setLevel(level)


def build_changelog_config(
    config: Dict[str, Any],
    git_config=None,
    merge_filter: MergeFilter = MergeFilter.ALL,
    title: Optional[str] = None,
) -> ChangelogConfig:
    """
    Build the immutable run settings.

    Precedence, lowest first: defaults, config file, environment,
    git config (``changelog.format``, ``changelog.mergeformat``,
    ``changelog.opts``), command-line flags.

    Args:
        config: Loaded configuration dict
        git_config: Callable mapping a git config key to its value or None
        merge_filter: Merge commit filter from the command line
        title: Untagged section label from the command line
    """
    general = config.get("general", {})
    fmt = config.get("format", {})

    values = {
        "log_format": fmt.get("commit") or DEFAULT_LOG_FORMAT,
        "merge_format": fmt.get("merge") or DEFAULT_MERGE_FORMAT,
        "log_options": fmt.get("log_options") or "",
    }
    if git_config is not None:
        for field_name, key in GIT_CONFIG_KEYS.items():
            value = git_config(key)
            if value:
                logger.debug(f"Using git config {key}={value}")
                values[field_name] = value

    log_options = values["log_options"]
    if isinstance(log_options, str):
        log_options = shlex.split(log_options)

    return ChangelogConfig(
        log_format=values["log_format"],
        merge_format=values["merge_format"],
        log_options=tuple(log_options),
        merge_filter=merge_filter,
        default_title=title or general.get("title") or DEFAULT_TITLE,
        default_filename=general.get("filename") or DEFAULT_FILENAME,
        open_editor=bool(general.get("open_editor", True)),
        editor=general.get("editor") or None,
    )
