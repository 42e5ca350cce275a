# tests/test_emitter.py
"""
Tests for rendering harness descriptors as C++ declarations.
"""

from ramfuzz_gen.codegen import CodeGen
from ramfuzz_gen.emitter import HarnessEmitter, emit
from ramfuzz_gen.harness import build_descriptor
from ramfuzz_gen.ir import Access
from tests.conftest import WIDGET_HARNESS, ctor, make_class, member

SELECTOR = "(unsigned ctr);"


def _emit(cls):
    return emit(build_descriptor(cls))


class TestWidgetHarness:

    def test_exact_output(self, widget):
        assert _emit(widget) == WIDGET_HARNESS

    def test_deterministic(self, widget):
        assert _emit(widget) == _emit(widget)

    def test_owner_declared_before_reference(self, widget):
        code = _emit(widget)
        assert code.index("std::unique_ptr<Widget> pobj;") < code.index("Widget& obj;")

    def test_private_member_not_stubbed(self, widget):
        assert "hidden" not in _emit(widget)

    def test_destructor_not_stubbed(self, widget):
        assert "tWidget" not in _emit(widget)


class TestConditionalSelector:

    def test_absent_without_constructors(self):
        code = _emit(make_class("Tool", [member("use")]))
        assert SELECTOR not in code
        assert "Creates obj internally" not in code
        assert "static mptr roulette[1];" in code

    def test_absent_with_private_constructor(self):
        cls = make_class("Single", [ctor("Single", access=Access.PRIVATE), member("get")])
        assert SELECTOR not in _emit(cls)

    def test_present_once_with_several_constructors(self):
        cls = make_class("Multi", [ctor("Multi"), ctor("Multi"), member("go")])
        code = _emit(cls)
        assert code.count("RF__Multi(unsigned ctr);") == 1
        assert "Multi* Multi0();" in code
        assert "Multi* Multi1();" in code


class TestDispatchTable:

    def test_sized_to_methods_only(self):
        cls = make_class("T", [ctor("T"), member("a"), ctor("T"), member("b"), member("b")])
        code = _emit(cls)
        assert "static mptr roulette[3];" in code
        assert "using mptr = void (RF__T::*)();" in code

    def test_zero_eligible_members(self):
        cls = make_class("Hollow", [member("f", access=Access.PROTECTED)],
                         has_public_method=True)
        code = _emit(cls)
        assert "static mptr roulette[0];" in code
        assert SELECTOR not in code
        assert "RF__Hollow(Hollow& obj)" in code
        assert "();" not in code.replace("void (RF__Hollow::*)();", "")


class TestEmitterOptions:

    def test_qualified_class_name(self):
        cls = make_class("Widget", [member("spin")], qualified_name="gui::Widget")
        code = _emit(cls)
        assert "class RF__Widget {" in code
        assert "std::unique_ptr<gui::Widget> pobj;" in code
        assert "RF__Widget(gui::Widget& obj)" in code

    def test_custom_namespace(self, widget):
        gen = CodeGen()
        HarnessEmitter(namespace="harness").generate(build_descriptor(widget), gen)
        code = gen.output()
        assert code.startswith("namespace harness {\n")
        assert code.endswith("} // namespace harness\n")
