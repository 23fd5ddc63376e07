"""Declarations used in the body of an :class:`~injectable.component.Injectable` class.

Example:
    >>> class PlayerCounter(Injectable):
    ...     counter = dependency()
    ...     team_query = dependency(cls=TeamQuery, args=["players"])
    ...     player_id = argument(type=int)
    ...     limit = initialize_with(default=10)
    ...
    ...     @dependency(depends_on="counter")
    ...     def scorer(counter):
    ...         return Scorer(counter)
    ...
    ...     @returns(int)
    ...     def call(self):
    ...         return self.scorer.score(self.player_id)

Declarations are collected in definition order when the class is created. On an
instance, reading a dependency yields its resolved instance and reading an
argument yields the value it was given.
"""

import inspect
from typing import Any, Callable, Optional

from injectable.arguments import normalise_args
from injectable.domain import MISSING, ArgumentSpec
from injectable.errors import DeclarationError
from injectable.graph import DependencyGraph
from injectable.validators import make_return_spec, validate_argument_declaration

__all__ = [
    "DependencyDeclaration",
    "ArgumentDeclaration",
    "dependency",
    "argument",
    "initialize_with",
    "returns",
    "CALL",
    "INITIALIZE",
]

CALL = "call"
INITIALIZE = "initialize"


class DependencyDeclaration:
    """A dependency declared on a component class."""

    def __init__(
        self,
        factory: Optional[Callable[..., Any]] = None,
        cls: Optional[type] = None,
        depends_on: tuple[str, ...] = (),
        args: Optional[tuple[Any, ...]] = None,
        call: Optional[str] = None,
    ):
        if factory is not None and cls is not None:
            raise DeclarationError("A dependency cannot declare both a factory and a class")
        self.name: Optional[str] = None
        self.factory = factory
        self.cls = cls
        self.depends_on = depends_on
        self.args = args
        self.call = call

    def __call__(self, factory: Callable[..., Any]) -> "DependencyDeclaration":
        """Use the decorated function as the factory."""
        if self.factory is not None or self.cls is not None:
            raise DeclarationError(f"Dependency {factory.__name__} already has a factory or class")
        if not callable(factory):
            raise DeclarationError(f"{factory!r} is not callable")
        self.factory = factory
        return self

    def __set_name__(self, owner: type, name: str):
        self.name = name

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self
        raise AttributeError(
            f"Dependency {self.name} of {owner.__name__} has not been resolved yet"
        )

    def declare(self, name: str, graph: DependencyGraph) -> None:
        graph.add(
            name,
            self.depends_on,
            factory=self.factory,
            cls=self.cls,
            args=self.args,
            call=self.call,
        )

    def __repr__(self):
        return f"<dependency {self.name}>"


class ArgumentDeclaration:
    """A call or initialize argument declared on a component class."""

    def __init__(self, kind: str, type_: Optional[type] = None, default: Any = MISSING):
        self.kind = kind
        self.type = type_
        self.default = default
        self.name: Optional[str] = None

    def __set_name__(self, owner: type, name: str):
        self.name = name

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self
        if self.default is not MISSING:
            return self.default
        raise AttributeError(f"Argument {self.name} of {owner.__name__} has not been passed")

    def spec(self, name: str) -> ArgumentSpec:
        validate_argument_declaration(name, self.type, self.default)
        return ArgumentSpec(name, self.type, self.default)

    def __repr__(self):
        return f"<{self.kind} argument {self.name}>"


def dependency(
    factory: Optional[Callable[..., Any]] = None,
    *,
    cls: Optional[type] = None,
    depends_on=(),
    args: Any = None,
    call: Optional[str] = None,
) -> DependencyDeclaration:
    """Declare a dependency of the component.

    Without ``factory`` or ``cls`` the instance is built from the type the
    dependency's name refers to (see :mod:`injectable.naming`).

    Args:
        factory: Callable producing the instance. It receives the resolved
            ``depends_on`` dependencies as keyword arguments. May also be given by
            using the declaration as a decorator.
        cls: Class to instantiate instead of the one derived from the name.
        depends_on: Name, or sequence of names, of dependencies declared earlier
            that must be resolved first.
        args: Extra arguments for the constructor of ``cls`` or the derived type.
            A list is marshaled by :func:`~injectable.arguments.marshal_arguments`;
            a mapping is passed as keywords; any other value as the single
            positional argument.
            Constructor parameters the list leaves unfilled receive None, even
            when the constructor gives them a default of its own.
        call: Name of a method of the instance to expose as ``call``.

    Example:
        >>> team_query = dependency()
        >>> player_query = dependency(cls=UserQuery)
        >>> renderer = dependency(call="render")
        >>>
        >>> @dependency(depends_on=["counter", "team_service"])
        >>> def player_counter(counter, team_service):
        ...     return PlayerCounter(counter, team_service)
    """
    return DependencyDeclaration(factory, cls, _names(depends_on), normalise_args(args), call)


def argument(type: Optional[type] = None, default: Any = MISSING) -> ArgumentDeclaration:
    """Declare a keyword argument of ``call``. Required unless a default is given."""
    return ArgumentDeclaration(CALL, type, default)


def initialize_with(type: Optional[type] = None, default: Any = MISSING) -> ArgumentDeclaration:
    """Declare a keyword argument of the component's constructor."""
    return ArgumentDeclaration(INITIALIZE, type, default)


def returns(
    type_: type, of: Optional[type] = None, nullable: bool = False, allow_nils: bool = False
) -> Callable:
    """Declare the return contract of the decorated ``call`` method.

    Args:
        type_: The class of the returned value, or the collection class if
            ``of`` is given.
        of: The class of every element of a returned collection.
        nullable: Whether ``call`` may return None.
        allow_nils: Whether a returned collection may contain None.

    Example:
        >>> @returns(list, of=User, allow_nils=True)
        >>> def call(self):
        ...     return [self.user_query.find(self.user_id), None]
    """
    spec = make_return_spec(type_, of, nullable, allow_nils)

    def decorator(func: Callable) -> Callable:
        if not inspect.isfunction(func):
            raise DeclarationError(f"returns must decorate a function, got {func!r}")
        func.__return_spec__ = spec
        return func

    return decorator


def _names(depends_on) -> tuple[str, ...]:
    if isinstance(depends_on, str):
        return (depends_on,)
    return tuple(depends_on)
