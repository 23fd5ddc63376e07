import pytest

from injectable.component_builder import CallAlias, ComponentBuilder, alias_call
from injectable.domain import Dependency
from injectable.errors import DependencyError, DuplicateEntryPointError
from injectable.naming import NameResolver


class Renderer:
    def render(self, text, *, kwarg):
        return f"render has been called with {text} and {kwarg}"


class CallableRenderer(Renderer):
    def call(self, text):
        return text


class Widget:
    def __init__(self, label=None):
        self.label = label


@pytest.fixture
def builder() -> ComponentBuilder:
    return ComponentBuilder(NameResolver())


def test_alias_forwards_arguments_and_return_value():
    aliased = alias_call(Renderer(), "render")

    assert aliased.call("hello", kwarg="world") == "render has been called with hello and world"
    assert aliased("hello", kwarg="world") == "render has been called with hello and world"


def test_alias_forwards_callbacks():
    class Runner:
        def run(self, block):
            return block()

    assert alias_call(Runner(), "run").call(lambda: "can't block this") == "can't block this"


def test_alias_over_existing_call_raises():
    with pytest.raises(DuplicateEntryPointError, match="CallableRenderer already defines call"):
        alias_call(CallableRenderer(), "render")


def test_alias_to_missing_method_raises():
    with pytest.raises(DependencyError, match="Renderer has no method paint"):
        alias_call(Renderer(), "paint")


def test_alias_leaves_wrapped_object_untouched():
    text = "HELLO"

    aliased = alias_call(text, "lower")

    assert aliased.call() == "hello"
    assert aliased.wrapped is text
    assert not hasattr(text, "call")


def test_alias_delegates_other_attributes():
    renderer = Renderer()
    renderer.theme = "dark"

    assert alias_call(renderer, "render").theme == "dark"


def test_builder_applies_call_alias(builder):
    descriptor = Dependency.make("renderer", cls=Renderer, call="render")

    built = builder.build(descriptor, {}, None)

    assert isinstance(built, CallAlias)
    assert built.call("a", kwarg="b") == "render has been called with a and b"


def test_builder_instantiates_explicit_type_with_marshaled_args(builder):
    descriptor = Dependency.make("widget", cls=Widget, args=("ok",))

    assert builder.build(descriptor, {}, None).label == "ok"


def test_builder_fills_unpassed_slots_with_none(builder):
    descriptor = Dependency.make("widget", cls=Widget)

    assert builder.build(descriptor, {}, None).label is None


def test_builder_calls_factory_with_dependencies(builder):
    descriptor = Dependency.make("label", ["widget"], factory=lambda widget: f"label of {widget}")

    assert builder.build(descriptor, {"widget": "w"}, None) == "label of w"


def test_builder_applies_transformers_in_order():
    seen = []

    def record(descriptor, instance):
        seen.append((descriptor.name, instance))
        return f"{instance}!"

    builder = ComponentBuilder(NameResolver(), [record, record])

    assert builder.build(Dependency.make("greeting", factory=lambda: "hi"), {}, None) == "hi!!"
    assert seen == [("greeting", "hi"), ("greeting", "hi!")]


def test_builder_passes_none_over_constructor_defaults(builder):
    class Counter:
        def __init__(self, start=0):
            self.start = start

    assert builder.build(Dependency.make("counter", cls=Counter), {}, None).start is None
