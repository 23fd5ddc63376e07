"""Marshaling of declared extra-argument lists into constructor calls.

A dependency may declare a list of extra arguments for its constructor::

    query = dependency(cls=UserQuery, args=["users", Keywords(limit=10)])

The list is turned into positional and keyword arguments by
:func:`marshal_arguments`. The last element is used as the keyword map only if it
is a :class:`Keywords` instance; a plain ``dict`` is always a positional value.
Every parameter of the target receives a value: slots that the list does not
fill are passed as ``None`` rather than left out.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from injectable.errors import DeclarationError

__all__ = ["Keywords", "ArgumentSlots", "marshal_arguments", "normalise_args"]


class Keywords(dict):
    """A mapping of identifier keys to be passed as keyword arguments.

    Example:
        >>> Keywords(limit=10, offset=0)
        >>> Keywords({"limit": 10})
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        invalid = [key for key in self if not (isinstance(key, str) and key.isidentifier())]
        if invalid:
            raise DeclarationError(f"Keywords keys must be identifiers, got {invalid}")

    def __repr__(self):
        return f"Keywords({super().__repr__()})"


@dataclass(frozen=True)
class ArgumentSlots:
    """The parameters a constructor accepts.

    Attributes:
        positional: Names of parameters that can be passed by position, in order.
        keywords: Names of keyword-only parameters.
        var_positional: Whether the target accepts ``*args``.
        var_keyword: Whether the target accepts ``**kwargs``.
    """

    positional: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()
    var_positional: bool = False
    var_keyword: bool = False

    @staticmethod
    def for_callable(target: Callable[..., Any]) -> "ArgumentSlots":
        """Read the slots from the signature of ``target``.

        Targets without an introspectable signature (some builtins) get no
        fixed slots and accept anything, so declared values pass through as-is.
        """
        try:
            signature = inspect.signature(target)
        except (TypeError, ValueError):
            return ArgumentSlots(var_positional=True, var_keyword=True)

        positional = []
        keywords = []
        var_positional = False
        var_keyword = False
        for name, parameter in signature.parameters.items():
            kind = parameter.kind
            if kind in (parameter.POSITIONAL_ONLY, parameter.POSITIONAL_OR_KEYWORD):
                positional.append(name)
            elif kind is parameter.KEYWORD_ONLY:
                keywords.append(name)
            elif kind is parameter.VAR_POSITIONAL:
                var_positional = True
            else:
                var_keyword = True
        return ArgumentSlots(tuple(positional), tuple(keywords), var_positional, var_keyword)


def normalise_args(args: Any) -> Optional[tuple[Any, ...]]:
    """Turn the value given to ``dependency(args=...)`` into a declared list.

    A list or tuple is the declared list itself, a bare mapping is a single
    keyword map and anything else is a single positional value.
    """
    if args is None:
        return None
    if isinstance(args, (list, tuple)):
        return tuple(args)
    if isinstance(args, dict) and not isinstance(args, Keywords):
        return (Keywords(args),)
    return (args,)


def marshal_arguments(
    declared: Optional[Iterable[Any]], slots: ArgumentSlots
) -> tuple[list[Any], dict[str, Any]]:
    """Split a declared argument list into ``(positional, keywords)``.

    Args:
        declared: The declared extra-argument list, or None if none was declared.
        slots: The parameters of the constructor being called.

    Returns:
        A list of positional values with one entry for every positional slot
        (plus any surplus values), and a dict with one entry for every
        keyword-only slot (plus any extra keys of the keyword map).

    Example:
        >>> slots = ArgumentSlots(("arg1", "arg2"), ("arg3", "arg4"))
        >>> marshal_arguments([{"a": 1}, Keywords(arg3=3)], slots)
        ([{'a': 1}, None], {'arg3': 3, 'arg4': None})
    """
    positional = list(declared or ())
    keyword_map: dict[str, Any] = {}
    if positional and isinstance(positional[-1], Keywords):
        keyword_map = dict(positional.pop())

    for name in slots.positional[len(positional):]:
        positional.append(keyword_map.pop(name, None))

    keywords = {name: keyword_map.pop(name, None) for name in slots.keywords}
    keywords.update(keyword_map)
    return positional, keywords
