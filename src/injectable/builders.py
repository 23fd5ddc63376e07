"""High level entry points for constructing components."""

from typing import Any, Mapping, Optional

from injectable.context import ResolutionContext

__all__ = ["make_context", "build", "resolve"]


def make_context(
    component_type: type, overrides: Optional[Mapping[str, Any]] = None
) -> ResolutionContext:
    """Create a fresh :class:`ResolutionContext` for a component class.

    Args:
        component_type: An :class:`~injectable.component.Injectable` subclass.
        overrides: Instances to use instead of building the named dependencies.

    Returns:
        A context resolving the component's declared dependencies, looking up
        name-derived types with the component's resolver.
    """
    configuration = component_type.__injectable__
    return ResolutionContext(
        configuration.dependencies,
        overrides,
        configuration.resolver,
        scope=component_type,
    )


def build(component_type: type, overrides: Optional[Mapping[str, Any]] = None) -> Any:
    """Construct a fully wired component.

    Args:
        component_type: An :class:`~injectable.component.Injectable` subclass.
        overrides: Values for initialize arguments and instances to use instead
            of building the named dependencies.

    Returns:
        The component instance with every declared dependency resolved.

    Raises:
        DependencyError: If a dependency cannot be built.
        MissingArgumentError: If a required initialize argument is missing.

    Example:
        >>> service = build(GreetPlayer, {"player_query": fake_query})
        >>> service.call(player_id=42)
    """
    return component_type.build(**dict(overrides or {}))


def resolve(
    component_type: type, name: str, overrides: Optional[Mapping[str, Any]] = None
) -> Any:
    """Build a single dependency of a component, and only what it depends on."""
    return make_context(component_type, overrides).get(name)
