"""Process-wide configuration, overridable per context.

The configuration is loaded once from ``config.yaml`` (or the file named by
``STOREFRONT_CONFIG``) and falls back to the model defaults when the file is
absent. Tests and the CLI narrow it with ``with_context``.
"""

import os
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path

from pydantic import BaseModel

from src.storefront.runtime.config.config_data import ConfigData
from src.storefront.runtime.config.config_template import load_templated_yaml

CONFIG_PATH = Path(os.getenv("STOREFRONT_CONFIG", "config.yaml"))


@dataclass
class AppContext:
    config: ConfigData


def load_config(path: Path = CONFIG_PATH) -> ConfigData:
    if path.exists():
        return load_templated_yaml(path)
    return ConfigData()


_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=AppContext(config=load_config())
)


def get_context() -> AppContext:
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    return _app_context.set(context)


def _has_explicit_values(model: BaseModel) -> bool:
    return any(
        isinstance(value, BaseModel) and _has_explicit_values(value)
        for value in (getattr(model, name) for name in type(model).model_fields)
    ) or bool(model.model_fields_set)


def _overlay(base: BaseModel, override: BaseModel) -> BaseModel:
    """Copy ``base`` with the explicitly set values of ``override`` applied.

    A nested model that was passed without any explicit values of its own
    replaces the base model wholesale.
    """
    updates = {}
    for name in type(override).model_fields:
        value = getattr(override, name)
        if isinstance(value, BaseModel) and _has_explicit_values(value):
            updates[name] = _overlay(getattr(base, name), value)
        elif name in override.model_fields_set:
            updates[name] = value
    return base.model_copy(update=updates)


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Temporarily overlay ``config_override`` onto the current configuration.

    Example:
        override = ConfigData()
        override.storage.private_dir = "/tmp/assets"
        with with_context(override):
            assert get_config().storage.private_dir == "/tmp/assets"
    """
    if config_override is None:
        yield
        return
    if not isinstance(config_override, ConfigData):
        raise ValueError(f"config_override must be ConfigData or None, got {type(config_override)}")

    current = get_context()
    token = set_context(replace(current, config=_overlay(current.config, config_override)))
    try:
        yield
    finally:
        _app_context.reset(token)


def set_config(config: ConfigData) -> None:
    """Replace the configuration of the current context."""
    set_context(replace(get_context(), config=config))


def get_config() -> ConfigData:
    return get_context().config
