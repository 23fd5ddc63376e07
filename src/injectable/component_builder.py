"""Utilities for turning dependency descriptors into live instances.

This module provides the ComponentBuilder class, which runs the build strategy of
a :class:`~injectable.domain.Dependency` and passes the result through a chain of
transformers. The default chain applies the descriptor's call alias, wrapping the
instance in a :class:`CallAlias` when the descriptor names one.
"""

import logging
from functools import reduce
from typing import Any, Callable, Optional

from injectable.arguments import ArgumentSlots, marshal_arguments
from injectable.domain import Dependency, ExplicitType, FactoryFunction, NameDerivedType
from injectable.errors import DependencyError, DuplicateEntryPointError
from injectable.naming import NameResolver

__all__ = ["CallAlias", "alias_call", "apply_call_alias", "ComponentBuilder", "Transformer"]

logger = logging.getLogger(__name__)

Transformer = Callable[[Dependency, Any], Any]


class CallAlias:
    """Expose one method of a wrapped object as ``call``.

    Every other attribute is read from the wrapped object, which is left untouched.
    """

    def __init__(self, target: Any, method_name: str):
        self._target = target
        self._method_name = method_name

    @property
    def wrapped(self) -> Any:
        return self._target

    def call(self, *args, **kwargs) -> Any:
        return getattr(self._target, self._method_name)(*args, **kwargs)

    def __call__(self, *args, **kwargs) -> Any:
        return self.call(*args, **kwargs)

    def __getattr__(self, name: str) -> Any:
        if name == "_target":
            raise AttributeError(name)
        return getattr(self._target, name)

    def __repr__(self):
        return f"CallAlias({self._target!r}, {self._method_name!r})"


def alias_call(instance: Any, method_name: str) -> CallAlias:
    """Wrap ``instance`` so that ``call`` forwards to ``method_name``.

    Raises:
        DuplicateEntryPointError: If the instance already has a ``call`` attribute.
        DependencyError: If the instance has no callable ``method_name``.
    """
    if hasattr(instance, "call"):
        raise DuplicateEntryPointError(
            f"{_type_name(instance)} already defines call, cannot alias it to {method_name}"
        )
    if not callable(getattr(instance, method_name, None)):
        raise DependencyError(f"{_type_name(instance)} has no method {method_name} to alias as call")
    return CallAlias(instance, method_name)


def apply_call_alias(descriptor: Dependency, instance: Any) -> Any:
    if descriptor.call is None:
        return instance
    logger.debug("Aliasing %s.%s as call for dependency %r", _type_name(instance), descriptor.call, descriptor.name)
    return alias_call(instance, descriptor.call)


class ComponentBuilder:
    """Build dependency instances and apply transformers to the result."""

    def __init__(
        self,
        resolver: NameResolver,
        transformers: Optional[list[Transformer]] = None,
    ):
        self._resolver = resolver
        self._transformers = [apply_call_alias] if transformers is None else transformers

    def build(self, descriptor: Dependency, dependencies: dict[str, Any], scope: Any) -> Any:
        """Run the descriptor's build strategy and apply transformers.

        Args:
            descriptor: The dependency being built.
            dependencies: The resolved ``depends_on`` instances keyed by name. Only
                factory strategies receive them.
            scope: The owning component class, used to look up name-derived types.

        Returns:
            The built, transformed instance.
        """
        strategy = descriptor.strategy
        if isinstance(strategy, FactoryFunction):
            instance = strategy.func(**dependencies) if dependencies else strategy.func()
        elif isinstance(strategy, ExplicitType):
            instance = self.instantiate(strategy.cls, descriptor.args)
        elif isinstance(strategy, NameDerivedType):
            instance = self.instantiate(self._resolver.resolve(descriptor.name, scope), descriptor.args)
        else:
            raise DependencyError(f"Unsupported build strategy {strategy!r} for dependency '{descriptor.name}'")

        return reduce(
            lambda built, transformer: transformer(descriptor, built),
            self._transformers,
            instance,
        )

    @staticmethod
    def instantiate(cls: type, declared_args: Optional[tuple[Any, ...]]) -> Any:
        positional, keywords = marshal_arguments(declared_args, ArgumentSlots.for_callable(cls))
        return cls(*positional, **keywords)


def _type_name(instance: Any) -> str:
    if isinstance(instance, type):
        return instance.__name__
    return type(instance).__name__
