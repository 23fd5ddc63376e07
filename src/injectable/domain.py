"""Domain models used throughout the framework."""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from injectable.errors import DeclarationError

__all__ = [
    "MISSING",
    "FactoryFunction",
    "ExplicitType",
    "NameDerivedType",
    "BuildStrategy",
    "Dependency",
    "ArgumentSpec",
    "SingleReturn",
    "CollectionReturn",
    "ReturnSpec",
]


class _Missing:
    """Marker for an argument declared without a default."""

    def __repr__(self):
        return "MISSING"

    def __bool__(self):
        return False


MISSING: Any = _Missing()


@dataclass(frozen=True)
class FactoryFunction:
    """Build by calling ``func`` with the resolved ``depends_on`` instances as keywords."""

    func: Callable[..., Any]


@dataclass(frozen=True)
class ExplicitType:
    """Build by instantiating ``cls`` with the marshaled extra arguments."""

    cls: type


@dataclass(frozen=True)
class NameDerivedType:
    """Build by instantiating the type the dependency name resolves to."""

    pass


BuildStrategy = Union[FactoryFunction, ExplicitType, NameDerivedType]


@dataclass(frozen=True)
class Dependency:
    """Describes one named node of a dependency graph.

    Attributes:
        name: Unique key of the dependency within its graph.
        depends_on: Names that must be resolved before this dependency is built.
            Every name was already registered when this descriptor was added.
        strategy: How the instance is produced.
        args: The declared extra-argument list passed to type strategies, or
            None if no list was declared.
        call: Name of a method on the built instance to expose as ``call``.

    There is no flag for a trailing callback: a callback passed to ``call`` is an
    ordinary argument and is forwarded as it is.
    """

    name: str
    depends_on: tuple[str, ...]
    strategy: BuildStrategy
    args: Optional[tuple[Any, ...]] = None
    call: Optional[str] = None

    @staticmethod
    def make(
        name: str,
        depends_on=(),
        factory: Optional[Callable[..., Any]] = None,
        cls: Optional[type] = None,
        args: Optional[tuple[Any, ...]] = None,
        call: Optional[str] = None,
    ) -> "Dependency":
        if factory is not None and cls is not None:
            raise DeclarationError(
                f"Dependency '{name}' declares both a factory and a class"
            )
        if factory is not None:
            strategy: BuildStrategy = FactoryFunction(factory)
        elif cls is not None:
            strategy = ExplicitType(cls)
        else:
            strategy = NameDerivedType()
        return Dependency(name, tuple(depends_on), strategy, args, call)


@dataclass(frozen=True)
class ArgumentSpec:
    """A declared call or initialize argument.

    Attributes:
        name: The keyword the argument is passed under.
        type: Expected class of the value, if declared.
        default: Value used when the argument is not passed, or MISSING if the
            argument is required.
    """

    name: str
    type: Optional[type] = None
    default: Any = MISSING

    @property
    def required(self) -> bool:
        return self.default is MISSING


@dataclass(frozen=True)
class SingleReturn:
    """Return contract for a single value."""

    type: type
    nullable: bool = False


@dataclass(frozen=True)
class CollectionReturn:
    """Return contract for a collection of elements of one type."""

    collection_type: type
    element_type: type
    nullable: bool = False
    allow_nils: bool = False


ReturnSpec = Union[SingleReturn, CollectionReturn]
