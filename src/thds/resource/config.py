"""Typed, discoverable configuration for resource handling.

- Configuration is always accessible and configurable via normal Python code.
- All active configuration is 'registered' and therefore discoverable.
- Config can be temporarily overridden for the current thread (or async task).
- Config can be set via a known environment variable at import time.

Usage:

from thds.resource import config

TIMEOUT = config.item("thds.resource.url.timeout_seconds", 30.0, parse=float)

def fetch():
    return TIMEOUT() * 2

TIMEOUT.set_global(10.0)
with TIMEOUT.set_local(1.0):
    assert fetch() == 2.0

* as an environment variable:

export THDS_RESOURCE_URL_TIMEOUT_SECONDS=5
"""

import typing as ty
from os import getenv

from .stack_context import StackContext

_NOT_CONFIGURED = object()


class UnconfiguredError(ValueError):
    pass


class ConfigNameCollisionError(KeyError):
    pass


def _sanitize_env(env_var_name: str) -> str:
    return env_var_name.replace("-", "_").replace(".", "_")


def _getenv(env_var_name: str) -> ty.Optional[str]:
    """Support the literal name, a sanitized name, and the upper-cased sanitized name."""
    return (
        getenv(env_var_name)
        or getenv(_sanitize_env(env_var_name))
        or getenv(_sanitize_env(env_var_name).upper())
    )


T = ty.TypeVar("T")


class ConfigItem(ty.Generic[T]):
    """Should only ever be constructed at a module level."""

    def __init__(
        self,
        name: str,
        default: T = ty.cast(T, _NOT_CONFIGURED),
        *,
        parse: ty.Callable[[ty.Any], T] = lambda x: x,
        allow_env_var: bool = True,
    ):
        if name in _REGISTRY:
            raise ConfigNameCollisionError(f"Config item {name} has already been registered!")
        _REGISTRY[name] = self
        self.name = name
        self.parse = parse
        env_value = _getenv(name) if allow_env_var else None
        if env_value:
            # env var is only applicable at initial creation.
            self.global_value = parse(env_value)
        else:
            self.global_value = default
        self._stack_context: StackContext[T] = StackContext(
            "config " + name, ty.cast(T, _NOT_CONFIGURED)
        )

    def set_global(self, value: T):
        """Global to the current process."""
        self.global_value = self.parse(value)

    def set_local(self, value: T) -> ty.ContextManager[T]:
        """Local to the current thread or async task."""
        return self._stack_context.set(self.parse(value))

    def __call__(self) -> T:
        local = self._stack_context()
        if local is not _NOT_CONFIGURED:
            return local
        if self.global_value is _NOT_CONFIGURED:
            raise UnconfiguredError(f"Config item '{self.name}' has not been configured!")
        return self.global_value

    def __repr__(self) -> str:
        return f"ConfigItem({self.name!r})"


def item(
    name: str,
    default: T = ty.cast(T, _NOT_CONFIGURED),
    *,
    parse: ty.Callable[[ty.Any], T] = lambda x: x,
    allow_env_var: bool = True,
) -> ConfigItem[T]:
    """Register a fully-named config item."""
    return ConfigItem(name, default, parse=parse, allow_env_var=allow_env_var)


def in_module(module_name: str) -> ty.Callable[..., ConfigItem]:
    """`in_module(__name__)("bar", 42)` registers `<module>.bar`, which avoids
    collisions and keeps config discoverable next to the code that uses it.
    """

    def _module(name: str, *args, **kwargs) -> ConfigItem:
        return ConfigItem(f"{module_name}.{name}", *args, **kwargs)

    return _module


_REGISTRY: ty.Dict[str, ConfigItem] = dict()


def config_by_name(name: str) -> ConfigItem:
    """Dynamic interface - in general, prefer accessing the ConfigItem object directly."""
    return _REGISTRY[name]


def set_global_defaults(config: ty.Mapping[str, ty.Any]):
    """Any config-file parser can create a dictionary of only the items it managed to
    read, and then all of those can be set at once via this function. Nested
    dictionaries are flattened into dotted names.
    """
    for name, value in config.items():
        if isinstance(value, ty.Mapping):
            set_global_defaults({f"{name}.{key}": val for key, val in value.items()})
            continue
        try:
            _REGISTRY[name].set_global(value)
        except KeyError as kerr:
            raise KeyError(
                f"Config item {name} is not registered. Please double-check your configuration."
            ) from kerr


def show_all_config() -> ty.Dict[str, ty.Any]:
    return {k: v() for k, v in _REGISTRY.items() if v.global_value is not _NOT_CONFIGURED}
