"""
Environment configuration loading for the client settings modules.

Uses python-decouple: each environment reads its own .env file from the
repository root and falls back to process environment variables.
"""

from pathlib import Path

from decouple import Config, RepositoryEnv
from decouple import config as default_config

ENV_FILES = {
    "development": ".env.dev",
    "test": ".env.test",
}


def get_env_file_path(environment):
    """Return the path of the .env file used by ``environment``."""
    env_file_name = ENV_FILES.get(environment, ".env")
    return Path(__file__).resolve().parent.parent.parent.parent / env_file_name


def load_environment_config(environment):
    """
    Load environment-specific configuration.

    Args:
        environment (str): 'development' or 'test'

    Returns:
        callable: decouple config bound to the environment's .env file, or
        the default decouple config when that file does not exist.
    """
    env_file_path = get_env_file_path(environment)

    if env_file_path.exists():
        print(f"✓ Loading environment: {environment} from {env_file_path.name}")
        return Config(RepositoryEnv(env_file_path))

    print(f"✗ Warning: {env_file_path.name} not found, using default config")
    return default_config
