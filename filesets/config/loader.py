# filesets/config/loader.py
"""
Handles loading and merging of fileset options from TOML files.
"""
import toml
from pathlib import Path
from typing import Any, Dict, Optional

from filesets.exceptions import ConfigError
from filesets.logging_setup import get_logger

log = get_logger(__name__)

PROJECT_CONFIG_FILENAMES = [".filesets.toml", "filesets.toml", "pyproject.toml"]
USER_CONFIG_DIR = Path.home() / ".config" / "filesets"
USER_CONFIG_FILE = USER_CONFIG_DIR / "config.toml"

# keys that may appear at the top level of a config file or in a profile.
CONFIG_OPTION_KEYS = ("ignore", "links", "recurse", "recurselimit", "checksum_type")
NON_OPTION_KEYS = ("profiles", "description")

def _load_toml_file_data(file_path: Path) -> Dict[str, Any]:
    if not file_path.is_file():
        return {}
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
    except (toml.TomlDecodeError, OSError) as e:
        raise ConfigError(f"Could not read config file {file_path}: {e}")
    if file_path.name == "pyproject.toml":
        return data.get("tool", {}).get("filesets", {})
    return data

def load_and_merge_configs(project_dir: Optional[Path] = None, user_config_file: Optional[Path] = None) -> Dict[str, Any]:
    # user-global settings first, then the first project file found overrides them.
    project_dir = project_dir or Path.cwd()
    user_config_file = user_config_file or USER_CONFIG_FILE

    merged_toml_data: Dict[str, Any] = {}
    if user_config_file.is_file():
        log.info("loading_user_global_config", path=str(user_config_file))
        merged_toml_data.update(_load_toml_file_data(user_config_file))

    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = project_dir / filename
        if not candidate.is_file():
            continue
        project_settings = _load_toml_file_data(candidate)
        if not project_settings:
            continue
        log.info("loading_project_local_config", path=str(candidate))
        profiles = _profiles_table(merged_toml_data, str(user_config_file))
        profiles.update(_profiles_table(project_settings, str(candidate)))
        project_settings.pop("profiles", None)
        merged_toml_data.update(project_settings)
        if profiles:
            merged_toml_data["profiles"] = profiles
        break

    if not merged_toml_data:
        log.debug("no_configuration_files_loaded")
    return merged_toml_data

def _profiles_table(data: Dict[str, Any], source: str) -> Dict[str, Any]:
    # [profiles] must be a table of tables.
    profiles = data.get("profiles", {})
    if not isinstance(profiles, dict):
        raise ConfigError(f"'profiles' in {source} must be a table, got {type(profiles).__name__}")
    for name, values in profiles.items():
        if not isinstance(values, dict):
            raise ConfigError(f"Profile '{name}' in {source} must be a table, got {type(values).__name__}")
    return dict(profiles)

def _option_keys_only(data: Dict[str, Any], source: str) -> Dict[str, Any]:
    options: Dict[str, Any] = {}
    for key, value in data.items():
        if key in CONFIG_OPTION_KEYS:
            options[key] = value
        elif key not in NON_OPTION_KEYS:
            log.warning("unknown_config_key_ignored", key=key, source=source)
    return options

def resolve_profile_options(config_data: Dict[str, Any], profile_name: Optional[str] = None) -> Dict[str, Any]:
    """
    Returns the fileset options from the top level of the config data,
    overlaid with those of ``profile_name`` when one is given.
    """
    options = _option_keys_only(config_data, "top_level")
    if not profile_name:
        return options

    profile_values = _profiles_table(config_data, "configuration").get(profile_name)
    if not profile_values:
        log.warning("profile_not_found_in_config_files", profile_name=profile_name)
        return options

    log.info("applying_profile_settings", profile=profile_name)
    options.update(_option_keys_only(profile_values, f"profile:{profile_name}"))
    return options
