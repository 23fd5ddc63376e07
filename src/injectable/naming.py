"""Lookup of the type a dependency name refers to.

A dependency declared without a factory or class is built from the type its name
refers to: ``team_query`` refers to ``TeamQuery`` and ``team_queries`` to
``TeamQueries`` or, failing that, ``TeamQuery``.

Names are searched for in an ordered chain of scopes, nearest first:

1. the owning component class (so nested classes are found, including those
   inherited from base classes, and a subclass can shadow its parent's),
2. the classes the owning class is nested in, innermost first,
3. the module the owning class is defined in,
4. any extra scopes given to the :class:`NameResolver`.
"""

import inspect
import sys
from collections.abc import Mapping
from typing import Any, Iterable

from injectable.errors import NameResolutionError

__all__ = ["NameResolver", "camelize", "singularize"]


def camelize(name: str) -> str:
    """Convert a snake_case name into a CamelCase type name.

    Example:
        >>> camelize("team_query")  # Returns "TeamQuery"
    """
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def singularize(word: str) -> str:
    """Naive English singular of ``word``.

    Example:
        >>> singularize("team_queries")  # Returns "team_query"
        >>> singularize("boxes")         # Returns "box"
        >>> singularize("status")        # Returns "status"
    """
    if word.endswith("ies") and len(word) > 3:
        return word[:-3] + "y"
    if word.endswith("sses"):
        return word[:-2]
    if word.endswith(("xes", "ches", "shes")):
        return word[:-2]
    if word.endswith("s") and not word.endswith(("ss", "us", "is")):
        return word[:-1]
    return word


class NameResolver:
    """Resolve dependency names to buildable types.

    Args:
        scopes: Extra scopes searched after the owner's own namespaces. Each may be
            a module, a class or a mapping of names to types.

    Example:
        >>> import services
        >>> resolver = NameResolver(scopes=[services])
        >>> resolver.resolve("team_query", MyComponent)  # MyComponent.TeamQuery, or services.TeamQuery
    """

    def __init__(self, scopes: Iterable[Any] = ()):
        self.scopes = tuple(scopes)

    def candidates(self, name: str) -> list[str]:
        """Type names tried for ``name``, in order."""
        names = [camelize(name), camelize(singularize(name))]
        return list(dict.fromkeys(names))

    def scopes_for(self, owner: Any) -> list[Any]:
        """The ordered chain of scopes searched on behalf of ``owner``."""
        if owner is None:
            return list(self.scopes)
        module = sys.modules.get(getattr(owner, "__module__", None) or "")
        chain = [owner, *_enclosing_classes(owner, module)]
        if module is not None:
            chain.append(module)
        chain.extend(scope for scope in self.scopes if scope not in chain)
        return chain

    def resolve(self, name: str, owner: Any = None) -> type:
        """Find the type ``name`` refers to from the point of view of ``owner``.

        Raises:
            NameResolutionError: If no scope defines any candidate type name.
        """
        candidates = self.candidates(name)
        chain = self.scopes_for(owner)
        for scope in chain:
            for candidate in candidates:
                found = _lookup(scope, candidate)
                if inspect.isclass(found):
                    return found

        searched = ", ".join(_describe(scope) for scope in chain) or "no scopes"
        raise NameResolutionError(
            f"Cannot resolve dependency '{name}': none of {candidates} found in {searched}"
        )

    def __repr__(self):
        return f"NameResolver(scopes={list(self.scopes)!r})"


def _lookup(scope: Any, name: str) -> Any:
    if isinstance(scope, Mapping):
        return scope.get(name)
    return getattr(scope, name, None)


def _enclosing_classes(owner: Any, module: Any) -> list[Any]:
    """Classes ``owner`` is lexically nested in, innermost first."""
    if module is None:
        return []
    path = getattr(owner, "__qualname__", "").split(".")[:-1]
    if "<locals>" in path:
        # classes defined in a function body cannot be reached by name
        return []

    enclosing = []
    current = module
    for part in path:
        current = getattr(current, part, None)
        if not inspect.isclass(current):
            break
        enclosing.append(current)
    return list(reversed(enclosing))


def _describe(scope: Any) -> str:
    if isinstance(scope, Mapping):
        return f"mapping of {len(scope)} names"
    return getattr(scope, "__qualname__", None) or getattr(scope, "__name__", None) or repr(scope)
