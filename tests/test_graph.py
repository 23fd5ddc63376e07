import pytest

from injectable.domain import ExplicitType, FactoryFunction, NameDerivedType
from injectable.errors import CyclicDependencyError, DeclarationError, MissingDependencyError
from injectable.graph import DependencyGraph


class Namespace:
    pass


class SubNamespace(Namespace):
    pass


@pytest.fixture
def graph() -> DependencyGraph:
    return DependencyGraph(Namespace)


def test_depending_on_undeclared_dependencies_raises(graph):
    with pytest.raises(MissingDependencyError, match="missing dependencies: missing, none"):
        graph.add("something", ["missing", "none"])


def test_missing_dependencies_lists_only_missing_names_in_order(graph):
    graph.add("present")

    with pytest.raises(MissingDependencyError) as raised:
        graph.add("something", ["zeta", "present", "alpha"])

    assert raised.value.missing == ["zeta", "alpha"]
    assert str(raised.value) == "missing dependencies: zeta, alpha"
    assert "something" not in graph


def test_dependencies_declared_earlier_can_be_depended_on(graph):
    graph.add("counter")
    descriptor = graph.add("player_counter", ["counter"])

    assert descriptor.depends_on == ("counter",)
    assert graph.names() == ["counter", "player_counter"]


def test_strategy_is_selected_from_declaration(graph):
    def make_it():
        return 1

    assert isinstance(graph.add("by_factory", factory=make_it).strategy, FactoryFunction)
    assert graph.add("by_class", cls=Namespace).strategy == ExplicitType(Namespace)
    assert graph.add("by_name").strategy == NameDerivedType()


def test_factory_and_class_are_mutually_exclusive(graph):
    with pytest.raises(DeclarationError, match="both a factory and a class"):
        graph.add("confused", factory=lambda: 1, cls=Namespace)


def test_lookup(graph):
    graph.add("counter", args=("x",), call="increment")

    descriptor = graph.lookup("counter")
    assert descriptor.name == "counter"
    assert descriptor.args == ("x",)
    assert descriptor.call == "increment"
    assert graph.lookup("nothing") is None
    assert graph["counter"] is descriptor
    with pytest.raises(KeyError):
        graph["nothing"]


def test_redeclaring_a_name_replaces_it(graph):
    graph.add("counter", cls=Namespace)
    graph.add("counter", cls=SubNamespace)

    assert graph.names() == ["counter"]
    assert graph["counter"].strategy == ExplicitType(SubNamespace)


def test_derived_graph_is_rescoped_copy(graph):
    graph.add("parent_dep")

    derived = graph.derive_for(SubNamespace)

    assert derived.scope is SubNamespace
    assert graph.scope is Namespace
    assert derived.names() == ["parent_dep"]
    assert derived["parent_dep"] is graph["parent_dep"]


def test_adding_to_derived_graph_does_not_leak_to_parent(graph):
    graph.add("parent_dep")
    child = graph.derive_for(SubNamespace)
    sibling = graph.derive_for(SubNamespace)

    child.add("child_dep", ["parent_dep"])

    assert "child_dep" not in graph.names()
    assert "child_dep" not in sibling.names()
    assert child.names() == ["parent_dep", "child_dep"]


def test_adding_to_parent_after_derivation_does_not_leak_to_child(graph):
    child = graph.derive_for(SubNamespace)

    graph.add("late")

    assert "late" not in child
    assert len(child) == 0
    assert list(graph) == ["late"]


def test_redeclaring_a_dependency_on_its_own_dependent_raises(graph):
    graph.add("a", factory=lambda: "a")
    graph.add("b", ["a"], factory=lambda a: a)
    graph.add("c", ["b"], factory=lambda b: b)

    with pytest.raises(CyclicDependencyError, match="dependency cycle: a -> c -> b -> a") as raised:
        graph.add("a", ["c"], factory=lambda c: c)

    assert raised.value.cycle == ["a", "c", "b", "a"]
    assert graph["a"].depends_on == ()


def test_redeclaring_a_dependency_on_itself_raises(graph):
    graph.add("a", factory=lambda: "a")

    with pytest.raises(CyclicDependencyError, match="dependency cycle: a -> a"):
        graph.add("a", ["a"], factory=lambda a: a)
