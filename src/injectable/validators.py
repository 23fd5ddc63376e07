"""Runtime checks for declared arguments and return contracts."""

import inspect
from typing import Any, Optional

from injectable.domain import MISSING, CollectionReturn, ReturnSpec, SingleReturn
from injectable.errors import DeclarationError, NilNotAllowedError, TypeMismatchError

__all__ = [
    "validate_argument_declaration",
    "validate_argument_type",
    "validate_single_return",
    "validate_collection_return",
    "validate_returns",
    "make_return_spec",
]


def validate_argument_declaration(name: str, type_: Optional[type] = None, default: Any = MISSING) -> None:
    """Check the options of an ``argument`` or ``initialize_with`` declaration.

    Raises:
        DeclarationError: If ``type_`` is not a class, or a non-None default is
            not an instance of it.
    """
    if type_ is None:
        return
    if not inspect.isclass(type_):
        raise DeclarationError(f":type for argument {name} must be a class")
    if default is MISSING or default is None:
        return
    if not isinstance(default, type_):
        raise DeclarationError(
            f"default for argument {name} is a {type(default).__name__}, needs to be a {type_.__name__}"
        )


def validate_argument_type(name: str, type_: Optional[type], value: Any) -> None:
    """Check a passed argument against its declared type. None always passes.

    Raises:
        TypeMismatchError: If the value is not an instance of ``type_``.
    """
    if type_ is None or value is None:
        return
    if not isinstance(value, type_):
        raise TypeMismatchError(
            f"argument {name} passed is a {type(value).__name__}, needs to be a {type_.__name__}"
        )


def validate_single_return(type_: type, nullable: bool, result: Any) -> None:
    if result is None:
        if not nullable:
            raise NilNotAllowedError(f"return value is None, expected {type_.__name__}")
    elif not isinstance(result, type_):
        raise TypeMismatchError(
            f"return value is a {type(result).__name__}, needs to be a {type_.__name__}"
        )


def validate_collection_return(
    collection_type: type, element_type: type, nullable: bool, allow_nils: bool, result: Any
) -> None:
    """Check a returned collection and each of its elements."""
    expected = f"{collection_type.__name__} of {element_type.__name__}"
    if result is None:
        if not nullable:
            raise NilNotAllowedError(f"return value is None, expected a {expected}")
        return
    if not isinstance(result, collection_type):
        raise TypeMismatchError(f"return value is a {type(result).__name__}, needs to be a {expected}")

    for element in result:
        if element is None:
            if not allow_nils:
                raise NilNotAllowedError("collection contains None but allow_nils is False")
        elif not isinstance(element, element_type):
            raise TypeMismatchError(
                f"return collection contains a {type(element).__name__}, "
                f"needs elements of {element_type.__name__}"
            )


def validate_returns(spec: Optional[ReturnSpec], result: Any) -> None:
    """Validate ``result`` against a return contract, if one is declared."""
    if spec is None:
        return
    if isinstance(spec, SingleReturn):
        validate_single_return(spec.type, spec.nullable, result)
    elif isinstance(spec, CollectionReturn):
        validate_collection_return(
            spec.collection_type, spec.element_type, spec.nullable, spec.allow_nils, result
        )
    else:
        raise DeclarationError(f"unknown return spec kind: {spec!r}")


def make_return_spec(
    type_: type, of: Optional[type] = None, nullable: bool = False, allow_nils: bool = False
) -> ReturnSpec:
    """Build a return contract from the options given to ``returns``.

    Raises:
        DeclarationError: If a type is not a class, or ``of`` is given and
            ``type_`` does not define ``__iter__``.
    """
    if of is None:
        if not inspect.isclass(type_):
            raise DeclarationError(":type for returns must be a class")
        return SingleReturn(type_, nullable)

    if not inspect.isclass(of):
        raise DeclarationError(":of for returns must be a class")
    if not inspect.isclass(type_):
        raise DeclarationError(":collection for returns must be a class")
    if not callable(getattr(type_, "__iter__", None)):
        raise DeclarationError(
            f"{type_.__name__} is not a collection-like class (must define __iter__) when specifying of"
        )
    return CollectionReturn(type_, of, nullable, allow_nils)
