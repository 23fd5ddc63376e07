"""Per-construction resolution of a dependency graph into live instances.

A :class:`ResolutionContext` is created for every component construction. It walks
the graph depth-first from the requested name, builds each dependency after the
ones it depends on and remembers every instance it produced, so a dependency
shared by several dependents is only built once. Values supplied as overrides are
used as they are and never built.

Contexts are never shared between constructions and are discarded when the
construction finishes, whether it succeeded or not.
"""

import logging
from typing import Any, Mapping, Optional

from injectable.component_builder import ComponentBuilder
from injectable.errors import UnknownDependencyError
from injectable.graph import DependencyGraph
from injectable.naming import NameResolver

__all__ = ["ResolutionContext"]

logger = logging.getLogger(__name__)


class ResolutionContext:
    """Resolve names from a :class:`DependencyGraph`, memoizing each instance.

    Args:
        graph: The graph to resolve from.
        overrides: Values to use instead of building the named dependencies.
        resolver: Used to find the type of name-derived dependencies. Defaults to a
            resolver with no extra scopes.
        builder: Runs build strategies. Defaults to a :class:`ComponentBuilder`
            using ``resolver``.
        scope: The owning component class; defaults to the graph's scope.
    """

    def __init__(
        self,
        graph: DependencyGraph,
        overrides: Optional[Mapping[str, Any]] = None,
        resolver: Optional[NameResolver] = None,
        builder: Optional[ComponentBuilder] = None,
        scope: Any = None,
    ):
        self.graph = graph
        self.scope = graph.scope if scope is None else scope
        self.overrides = dict(overrides or {})
        resolver = resolver or NameResolver()
        self._builder = builder or ComponentBuilder(resolver)
        self._built: dict[str, Any] = {}

    def get(self, name: str) -> Any:
        """Return the instance for ``name``, building it and its dependencies if needed.

        Raises:
            UnknownDependencyError: If ``name`` is neither overridden nor declared.
        """
        if name in self._built:
            return self._built[name]

        if name in self.overrides:
            self._built[name] = self.overrides[name]
            return self._built[name]

        descriptor = self.graph.lookup(name)
        if descriptor is None:
            raise UnknownDependencyError(name, self.scope)

        looked_up_dependencies = {
            dependency_name: self.get(dependency_name)
            for dependency_name in descriptor.depends_on
        }

        instance = self._builder.build(descriptor, looked_up_dependencies, self.scope)
        logger.debug(
            "Built dependency %r with %s", name, type(descriptor.strategy).__name__
        )
        self._built[name] = instance
        return instance

    def resolve_all(self) -> dict[str, Any]:
        """Resolve every declared dependency and every override.

        Returns:
            A mapping of name to instance, declared names first in declaration
            order.
        """
        for name in self.graph.names():
            self.get(name)
        for name in self.overrides:
            self.get(name)
        return dict(self._built)

    def __contains__(self, name: object) -> bool:
        return name in self._built or name in self.overrides or name in self.graph

    def __getitem__(self, name: str) -> Any:
        return self.get(name)
