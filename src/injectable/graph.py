"""The dependency graph of a component class.

Each component class owns a :class:`DependencyGraph` mapping dependency names to
:class:`~injectable.domain.Dependency` descriptors. A descriptor may only depend
on names that are already in the graph when it is added, and re-declaring a name
is refused when it would make the name depend on itself, so the graph cannot
contain cycles.

Subclasses receive their own copy of the parent's graph via
:meth:`DependencyGraph.derive_for`; dependencies they add are not visible to the
parent or to sibling subclasses.
"""

import logging
from typing import Any, Callable, Iterator, Optional

from injectable.domain import Dependency
from injectable.errors import CyclicDependencyError, MissingDependencyError

__all__ = ["DependencyGraph"]

logger = logging.getLogger(__name__)


class DependencyGraph:
    """Ordered mapping from dependency name to descriptor for one owning scope."""

    def __init__(self, scope: Any):
        self.scope = scope
        self._dependencies: dict[str, Dependency] = {}

    def add(
        self,
        name: str,
        depends_on=(),
        *,
        factory: Optional[Callable[..., Any]] = None,
        cls: Optional[type] = None,
        args: Optional[tuple[Any, ...]] = None,
        call: Optional[str] = None,
    ) -> Dependency:
        """Register a dependency.

        Args:
            name: The dependency name. Re-using a name replaces the earlier
                descriptor.
            depends_on: Names of dependencies to resolve before this one.
            factory: Callable producing the instance from its dependencies.
            cls: Class to instantiate instead of the one derived from ``name``.
            args: Declared extra arguments for the constructor.
            call: Method of the instance to expose as ``call``.

        Returns:
            The registered descriptor.

        Raises:
            MissingDependencyError: If any name in ``depends_on`` is not yet
                registered. All missing names are reported, in order.
            CyclicDependencyError: If ``name`` is being re-declared and one of
                ``depends_on`` already depends on it, directly or not.
        """
        depends_on = tuple(depends_on)
        missing = [dependency for dependency in depends_on if dependency not in self._dependencies]
        if missing:
            raise MissingDependencyError(missing)

        if name in self._dependencies:
            path = self._path_to(name, depends_on, set())
            if path:
                raise CyclicDependencyError([name, *path])

        descriptor = Dependency.make(name, depends_on, factory, cls, args, call)
        self._dependencies[name] = descriptor
        logger.debug("Added dependency %r to %s depending on %s", name, _scope_name(self.scope), list(depends_on))
        return descriptor

    def names(self) -> list[str]:
        """Registered names in declaration order."""
        return list(self._dependencies)

    def lookup(self, name: str) -> Optional[Dependency]:
        return self._dependencies.get(name)

    def _path_to(self, target: str, names: tuple[str, ...], seen: set[str]) -> Optional[list[str]]:
        """Chain of names leading from one of ``names`` to ``target``, if any."""
        for name in names:
            if name == target:
                return [name]
            if name in seen:
                continue
            seen.add(name)
            path = self._path_to(target, self._dependencies[name].depends_on, seen)
            if path:
                return [name, *path]
        return None

    def derive_for(self, new_scope: Any) -> "DependencyGraph":
        """Create an independent copy of this graph owned by ``new_scope``."""
        derived = DependencyGraph(new_scope)
        derived._dependencies = dict(self._dependencies)
        logger.debug("Derived dependency graph of %s for %s", _scope_name(self.scope), _scope_name(new_scope))
        return derived

    def __getitem__(self, name: str) -> Dependency:
        return self._dependencies[name]

    def __contains__(self, name: object) -> bool:
        return name in self._dependencies

    def __iter__(self) -> Iterator[str]:
        return iter(self._dependencies)

    def __len__(self) -> int:
        return len(self._dependencies)

    def __repr__(self):
        return f"DependencyGraph({_scope_name(self.scope)}, {self.names()})"


def _scope_name(scope: Any) -> str:
    return getattr(scope, "__qualname__", None) or repr(scope)
