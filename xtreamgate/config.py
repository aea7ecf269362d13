#!/usr/bin/env python3
"""
Configuration Loader Module

This module handles loading and parsing of YAML configuration files
for the XtreamGate application. It converts raw YAML data into
structured configuration objects.

@package XtreamGate
"""

# setup the imports
import yaml
from pathlib import Path
from typing import Optional
from xtreamgate.models import AppConfig

"""
Load and parse configuration from YAML file

Reads the specified YAML configuration file, validates its existence,
and converts the data into structured configuration objects for use
throughout the application. With no path given, the defaults are used.

@param config_path: str Path to the YAML configuration file
@return AppConfig: Fully populated application configuration object
@throws FileNotFoundError: When the specified config file does not exist
"""
def load_config(config_path: Optional[str] = None) -> AppConfig:

    # nothing to load, run on the defaults
    if config_path is None:
        return AppConfig()

    # load the config file
    config_file = Path(config_path)

    # make sure it actually exists
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    # now open it grab the data as yaml
    with open(config_file, 'r') as f:
        config_data = yaml.safe_load(f) or {}

    # hold the defaults so a partial file only overrides what it names
    defaults = AppConfig()

    # return the applications configuration with defaults if necessary
    return AppConfig(
        bind_host=config_data.get('bind_host', defaults.bind_host),
        bind_port=int(config_data.get('bind_port', defaults.bind_port)),
        public_url=(config_data.get('public_url') or defaults.public_url).rstrip('/'),
        log_level=config_data.get('log_level', defaults.log_level),
        session_ttl=int(config_data.get('session_ttl', defaults.session_ttl)),
        sweep_interval=int(config_data.get('sweep_interval', defaults.sweep_interval)),
        upstream_timeout=int(config_data.get('upstream_timeout', defaults.upstream_timeout)),
        preview_limit=int(config_data.get('preview_limit', defaults.preview_limit)),
        user_agent=config_data.get('user_agent', defaults.user_agent)
    )
