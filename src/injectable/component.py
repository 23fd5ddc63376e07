"""Components: classes whose dependencies are built for them.

Subclass :class:`Injectable`, declare dependencies and arguments in the class body
and define a ``call`` method taking no arguments besides ``self``::

    class GreetPlayer(Injectable):
        player_query = dependency()
        player_id = argument(type=int)

        @returns(str)
        def call(self):
            return f"Hello {self.player_query.find(self.player_id).name}"

    GreetPlayer.call(player_id=42)

Creating an instance builds every declared dependency through a fresh
:class:`~injectable.context.ResolutionContext`. Dependencies can be replaced by
passing them to the constructor (``GreetPlayer(player_query=fake_query)``).
"""

import functools
import inspect
import logging
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from injectable.builders import make_context
from injectable.declarations import INITIALIZE, ArgumentDeclaration, DependencyDeclaration
from injectable.domain import ArgumentSpec, ReturnSpec
from injectable.errors import (
    DeclarationError,
    MissingArgumentError,
    UndefinedCallError,
    UnknownArgumentError,
)
from injectable.graph import DependencyGraph
from injectable.naming import NameResolver
from injectable.validators import validate_argument_type, validate_returns

__all__ = ["ComponentConfiguration", "Injectable"]

logger = logging.getLogger(__name__)

_IN_CALL = "__injectable_in_call__"


@dataclass(frozen=True)
class ComponentConfiguration:
    """Everything declared on a component class.

    Built once when the class is created and derived, never modified, for each
    subclass.
    """

    dependencies: DependencyGraph
    """Declared dependencies, owned by the component class."""

    call_arguments: Mapping[str, ArgumentSpec]
    """Keyword arguments accepted by ``call``."""

    initialize_arguments: Mapping[str, ArgumentSpec]
    """Keyword arguments accepted by the constructor besides dependency overrides."""

    return_spec: Optional[ReturnSpec]
    """Contract the result of ``call`` is validated against, if any."""

    resolver: NameResolver
    """Looks up the types of name-derived dependencies."""

    def derive_for(
        self, component_type: type, resolver: Optional[NameResolver] = None
    ) -> "ComponentConfiguration":
        """Copy of this configuration for a subclass, with its own dependency graph."""
        return replace(
            self,
            dependencies=self.dependencies.derive_for(component_type),
            resolver=resolver or self.resolver,
        )

    def extended(
        self,
        call_arguments: Mapping[str, ArgumentSpec],
        initialize_arguments: Mapping[str, ArgumentSpec],
        return_spec: Optional[ReturnSpec] = None,
    ) -> "ComponentConfiguration":
        """Copy of this configuration with further arguments and return contract."""
        return replace(
            self,
            call_arguments=MappingProxyType({**self.call_arguments, **call_arguments}),
            initialize_arguments=MappingProxyType({**self.initialize_arguments, **initialize_arguments}),
            return_spec=return_spec if return_spec is not None else self.return_spec,
        )


def _required(arguments: Mapping[str, ArgumentSpec]) -> list[str]:
    return [name for name, spec in arguments.items() if spec.required]


def _assign_arguments(instance: Any, arguments: Mapping[str, ArgumentSpec], passed: Mapping[str, Any]):
    missing = [name for name in _required(arguments) if name not in passed]
    if missing:
        raise MissingArgumentError(missing)

    for name, spec in arguments.items():
        value = passed[name] if name in passed else spec.default
        validate_argument_type(name, spec.type, value)
        setattr(instance, name, value)


class _CallEntry:
    """Wraps a component's ``call`` with argument handling and return validation.

    Read from the class it creates an instance first, so ``Component.call(**kw)``
    is ``Component().call(**kw)``.

    Calls made while the instance is already inside ``call``, such as
    ``super().call()``, run the body directly: arguments are assigned and the
    result validated once, by the outermost call.
    """

    def __init__(self, func: Callable[[Any], Any]):
        self.func = func
        functools.update_wrapper(self, func)

    def __get__(self, instance: Any, owner: type) -> Callable[..., Any]:
        if instance is None:
            return functools.partial(_call_new_instance, owner)
        return functools.partial(_call_instance, instance, self.func)


def _call_new_instance(component_type: type, **arguments: Any) -> Any:
    return component_type().call(**arguments)


def _call_instance(instance: Any, func: Callable[[Any], Any], **arguments: Any) -> Any:
    # super().call() from an overriding call runs the parent's body only
    if instance.__dict__.get(_IN_CALL):
        return func(instance)

    configuration = type(instance).__injectable__
    unknown = [name for name in arguments if name not in configuration.call_arguments]
    if unknown:
        raise UnknownArgumentError(unknown)
    _assign_arguments(instance, configuration.call_arguments, arguments)

    instance.__dict__[_IN_CALL] = True
    try:
        result = func(instance)
    finally:
        del instance.__dict__[_IN_CALL]
    validate_returns(configuration.return_spec, result)
    return result


def _undefined_call(instance: Any) -> Any:
    raise UndefinedCallError(
        f"A call method with zero arity must be defined in {type(instance).__name__}"
    )


def _check_call_signature(component_type: type, func: Callable[..., Any]):
    parameters = list(inspect.signature(func).parameters.values())[1:]
    required = [
        parameter.name
        for parameter in parameters
        if parameter.default is parameter.empty
        and parameter.kind not in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD)
    ]
    if required:
        raise DeclarationError(
            f"A call method with zero arity must be defined in {component_type.__name__}, "
            f"but call requires {required}"
        )


class Injectable:
    """Base class for components built with their declared dependencies.

    Args:
        **overrides: Values for declared initialize arguments, and instances to
            use instead of building the named dependencies.

    Raises:
        MissingArgumentError: If a required initialize argument is not passed.
        UnknownArgumentError: If a keyword names neither an initialize argument
            nor a dependency.
        TypeMismatchError: If an initialize argument has the wrong type.
    """

    __injectable__: ComponentConfiguration

    def __init_subclass__(cls, resolver: Optional[NameResolver] = None, **kwargs):
        super().__init_subclass__(**kwargs)
        configuration = cls.__injectable__.derive_for(cls, resolver)
        call_arguments: dict[str, ArgumentSpec] = {}
        initialize_arguments: dict[str, ArgumentSpec] = {}

        for name, value in list(cls.__dict__.items()):
            if isinstance(value, DependencyDeclaration):
                value.declare(name, configuration.dependencies)
            elif isinstance(value, ArgumentDeclaration):
                target = initialize_arguments if value.kind == INITIALIZE else call_arguments
                target[name] = value.spec(name)

        return_spec = None
        own_call = cls.__dict__.get("call")
        if inspect.isfunction(own_call):
            _check_call_signature(cls, own_call)
            return_spec = getattr(own_call, "__return_spec__", None)
            cls.call = _CallEntry(own_call)

        cls.__injectable__ = configuration.extended(call_arguments, initialize_arguments, return_spec)

    def __init__(self, **overrides: Any):
        configuration = type(self).__injectable__
        initialize_arguments = configuration.initialize_arguments
        graph = configuration.dependencies

        unknown = [name for name in overrides if name not in initialize_arguments and name not in graph]
        if unknown:
            raise UnknownArgumentError(unknown)
        _assign_arguments(self, initialize_arguments, overrides)

        dependency_overrides = {
            name: value for name, value in overrides.items() if name not in initialize_arguments
        }
        context = make_context(type(self), dependency_overrides)
        self.__dict__.update(context.resolve_all())
        logger.debug("Constructed %s with dependencies %s", type(self).__qualname__, graph.names())

    call = _CallEntry(_undefined_call)

    @classmethod
    def build(cls, **overrides: Any) -> "Injectable":
        return cls(**overrides)

    @classmethod
    def required_call_arguments(cls) -> list[str]:
        return _required(cls.__injectable__.call_arguments)

    @classmethod
    def required_initialize_arguments(cls) -> list[str]:
        return _required(cls.__injectable__.initialize_arguments)


Injectable.__injectable__ = ComponentConfiguration(
    DependencyGraph(Injectable),
    MappingProxyType({}),
    MappingProxyType({}),
    None,
    NameResolver(),
)
