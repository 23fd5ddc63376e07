"""Injectable: declarative dependency injection for service objects.

Components declare their dependencies, arguments and return contract in the
class body. Every time a component is created its dependencies are built in
declaration order through a fresh resolution context, so a dependency shared by
several others is built once per component instance, and never shared between
instances.

Basic Usage:
    >>> from injectable import Injectable, argument, dependency, returns
    >>>
    >>> class CountPlayers(Injectable):
    ...     player_query = dependency()
    ...     team_id = argument(type=int)
    ...
    ...     @dependency(depends_on="player_query")
    ...     def active_players(player_query):
    ...         return lambda team_id: [p for p in player_query.all(team_id) if p.active]
    ...
    ...     @returns(int)
    ...     def call(self):
    ...         return len(self.active_players(self.team_id))
    >>>
    >>> CountPlayers.call(team_id=1)

The package consists of several modules:
    - component: the Injectable base class and its configuration
    - declarations: dependency, argument, initialize_with and returns
    - graph: the per-class dependency graph
    - context: per-construction resolution and memoization
    - component_builder: build strategies and call aliasing
    - arguments: marshaling of declared constructor arguments
    - naming: lookup of types for name-derived dependencies
    - validators: argument and return value checks
    - builders: high level construction functions
    - errors: framework-specific exceptions
"""

import logging

from injectable.arguments import Keywords
from injectable.builders import build, resolve
from injectable.component import ComponentConfiguration, Injectable
from injectable.context import ResolutionContext
from injectable.declarations import argument, dependency, initialize_with, returns
from injectable.errors import (
    CyclicDependencyError,
    DeclarationError,
    DependencyError,
    DuplicateEntryPointError,
    InjectableError,
    MissingArgumentError,
    MissingDependencyError,
    NameResolutionError,
    NilNotAllowedError,
    TypeMismatchError,
    UndefinedCallError,
    UnknownArgumentError,
    UnknownDependencyError,
)
from injectable.graph import DependencyGraph
from injectable.naming import NameResolver

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "Injectable",
    "ComponentConfiguration",
    "dependency",
    "argument",
    "initialize_with",
    "returns",
    "Keywords",
    "DependencyGraph",
    "ResolutionContext",
    "NameResolver",
    "build",
    "resolve",
    "InjectableError",
    "DependencyError",
    "MissingDependencyError",
    "CyclicDependencyError",
    "UnknownDependencyError",
    "NameResolutionError",
    "DuplicateEntryPointError",
    "DeclarationError",
    "TypeMismatchError",
    "NilNotAllowedError",
    "MissingArgumentError",
    "UnknownArgumentError",
    "UndefinedCallError",
]
