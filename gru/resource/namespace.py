"""Registering resource providers and functions into a scripting namespace."""

from __future__ import annotations

from collections.abc import Callable, MutableMapping
from dataclasses import dataclass
from typing import Any

from gru.resource.base import Provider, Resource, logf, providers

DEFAULT_FUNCTION_NAMESPACE = "stdlib"


@dataclass(frozen=True)
class FunctionItem:
    """A function to expose under ``namespace`` as ``name``."""

    name: str
    namespace: str
    function: Callable[..., Any]


_function_registry: list[FunctionItem] = []


def register_function(*args: FunctionItem) -> None:
    """Add functions to the registry."""
    _function_registry.extend(args)


def _table(env: MutableMapping[str, Any], namespace: str) -> MutableMapping[str, Any]:
    table = env.get(namespace)
    if table is None or table is False:
        table = {}
        env[namespace] = table
    return table


def _constructor(provider: Provider) -> Callable[[str], Resource]:
    def new(name: str) -> Resource:
        if not isinstance(name, str):
            raise TypeError(f"resource name must be a string, not {type(name).__name__}")
        return provider(name)

    return new


def register_builtin(env: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Install registered functions and providers into ``env``.

    Each function lands at ``env[namespace][name]``; each provider at
    ``env[namespace][type]["new"]``, a callable taking the resource name.
    Existing namespace tables are reused. Returns ``env``.
    """
    for item in _function_registry:
        _table(env, item.namespace)[item.name] = item.function

    for item in providers():
        _table(env, item.namespace)[item.type] = {"new": _constructor(item.provider)}

    return env


register_function(FunctionItem(name="logf", namespace=DEFAULT_FUNCTION_NAMESPACE, function=logf))