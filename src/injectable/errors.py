"""Exceptions raised while declaring, building and calling components."""

__all__ = [
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


class InjectableError(Exception):
    """Base class for every error raised by this package."""

    pass


class DependencyError(InjectableError):
    """Raised when a component's dependency cannot be declared or resolved."""

    pass


class MissingDependencyError(DependencyError):
    """Raised at declaration time when ``depends_on`` names an undeclared dependency."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"missing dependencies: {', '.join(self.missing)}")


class CyclicDependencyError(DependencyError):
    """Raised at declaration time when re-declaring a dependency would close a cycle."""

    def __init__(self, cycle: list[str]):
        self.cycle = list(cycle)
        super().__init__(f"dependency cycle: {' -> '.join(self.cycle)}")


class UnknownDependencyError(DependencyError):
    """Raised at resolution time for a name with no descriptor and no override."""

    def __init__(self, name: str, scope=None):
        self.name = name
        self.scope = scope
        where = f" in {getattr(scope, '__name__', scope)}" if scope is not None else ""
        super().__init__(f"unknown dependency '{name}'{where}")


class NameResolutionError(DependencyError):
    """Raised when no type can be found for a name-derived dependency."""

    pass


class DuplicateEntryPointError(DependencyError):
    """Raised when a call alias would shadow an existing ``call`` method."""

    pass


class DeclarationError(InjectableError, TypeError):
    """Raised when a declaration is malformed."""

    pass


class TypeMismatchError(InjectableError, TypeError):
    """Raised when an argument or return value has the wrong type."""

    pass


class NilNotAllowedError(InjectableError, TypeError):
    """Raised when ``None`` is returned where the return contract forbids it."""

    pass


class MissingArgumentError(InjectableError, TypeError):
    """Raised when required call or initialize arguments are not supplied."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"missing keywords: {', '.join(self.missing)}")


class UnknownArgumentError(InjectableError, TypeError):
    """Raised when a keyword is supplied that the component does not declare."""

    def __init__(self, unknown: list[str]):
        self.unknown = list(unknown)
        super().__init__(f"unknown keywords: {', '.join(self.unknown)}")


class UndefinedCallError(InjectableError, NotImplementedError):
    """Raised when a component has no usable ``call`` method."""

    pass
