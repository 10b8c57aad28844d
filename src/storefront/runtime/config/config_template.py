"""Loading of ``config.yaml`` with environment variable placeholders.

Placeholders take three forms:

- ``${NAME}``: the variable must be set;
- ``${NAME:-fallback}``: the fallback is used when the variable is unset;
- ``${NAME:?hint}``: the variable must be set, ``hint`` explains why.

Full-line YAML comments are left alone, so they may mention placeholders.
"""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic_core import ValidationError

from src.storefront.runtime.config.config_data import ConfigData

PLACEHOLDER = re.compile(r"\$\{(?P<name>[^}:]+)(?:(?P<op>:[-?])(?P<arg>[^}]*))?\}")

# Variables an operator must provide for the admin area to accept logins
ADMIN_ENV_VARS = {
    "ADMIN_USERNAME": "Username for the admin area",
    "HASHED_ADMIN_PASSWORD": "Base64 SHA-512 digest of the admin password",
}


def _resolve(match: re.Match) -> str:
    name, op, arg = match.group("name"), match.group("op"), match.group("arg")
    value = os.getenv(name)
    if value is not None:
        return value
    if op == ":-":
        return arg
    if op == ":?":
        raise ValueError(f"Required environment variable {name}: {arg}")
    raise ValueError(f"Required environment variable {name} not set")


def substitute_env_vars(text: str) -> str:
    """Replace every placeholder outside full-line comments.

    Raises:
        ValueError: If a required variable is unset
    """
    return "".join(
        line if line.lstrip().startswith("#") else PLACEHOLDER.sub(_resolve, line)
        for line in text.splitlines(keepends=True)
    )


def apply_environment_overrides(env_mode: str) -> None:
    """Copy ``{ENV}_NAME`` variables onto ``NAME`` for the active environment.

    With ``APP_ENVIRONMENT=production``, ``PRODUCTION_DATABASE_URL`` wins over
    ``DATABASE_URL``.
    """
    prefix = f"{env_mode.upper()}_"
    promoted = {
        name[len(prefix):]: value
        for name, value in os.environ.items()
        if name.startswith(prefix) and len(name) > len(prefix)
    }
    if promoted:
        logger.info("Applying {} overrides: {}", env_mode, sorted(promoted))
    os.environ.update(promoted)


def load_templated_yaml(file_path: Path) -> ConfigData:
    """Read ``file_path`` and validate its ``config`` section.

    Raises:
        ValueError: If a required variable is unset, the YAML is empty or
            malformed, or the values do not validate
        FileNotFoundError: If the file does not exist
    """
    env_mode = os.getenv("APP_ENVIRONMENT", "development")
    logger.info("Loading configuration {} for environment {}", file_path, env_mode)
    apply_environment_overrides(env_mode)

    try:
        document = yaml.safe_load(substitute_env_vars(Path(file_path).read_text()))
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e
    if not document:
        raise ValueError(f"Configuration file {file_path} is empty")

    try:
        config = ConfigData.model_validate(document.get("config") or {})
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    if config.app.environment == "production" and not config.admin.hashed_password:
        logger.warning("No admin password configured; the admin area will reject every login")
    return config


def validate_config_env_vars() -> dict[str, str]:
    """Return the admin variables that are unset, with what each one is for."""
    return {
        name: description for name, description in ADMIN_ENV_VARS.items() if not os.getenv(name)
    }
