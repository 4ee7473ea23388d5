import os
import json
import importlib.resources as pkg_resources

DEFAULT_CONFIG_FILE = 'ere_reader_config.json'

def load_config(filename=DEFAULT_CONFIG_FILE, user_config_dir=None):
    """
    Load config JSON file.
    Priority:
    1. If user_config_dir is provided and file exists there, load that.
    2. Otherwise load from package defaults.

    A user file only needs the keys it changes; missing keys keep the package default.
    """
    with pkg_resources.files('ere_reader.config').joinpath(DEFAULT_CONFIG_FILE).open('r') as f:
        config = json.load(f)

    if user_config_dir:
        user_config_path = os.path.join(user_config_dir, filename)
        if os.path.exists(user_config_path):
            with open(user_config_path, 'r') as f:
                config.update(json.load(f))
            return config

    if filename != DEFAULT_CONFIG_FILE:
        with pkg_resources.files('ere_reader.config').joinpath(filename).open('r') as f:
            config.update(json.load(f))

    return config
