"""
Tests for classes, instances, methods and inheritance.
"""
import pytest

from loxlang.exceptions import (
    ArityException,
    LoxRuntimeException,
    SuperclassException,
    UndefinedPropertyException,
)
from loxlang.tests.utils import output_lines, run_source


def test_fields_and_methods(capsys):
    source = (
        "class Point {\n"
        "    init(x, y) { this.x = x; this.y = y; }\n"
        "    sum() { return this.x + this.y; }\n"
        "}\n"
        "var p = Point(1, 2);\n"
        "print p.sum();\n"
        "p.x = 10;\n"
        "print p.sum();\n"
    )
    run_source(source)
    assert output_lines(capsys) == ["3", "12"]


def test_fields_shadow_methods(capsys):
    source = (
        "class A { m() { return \"method\"; } }\n"
        "var a = A();\n"
        "print a.m();\n"
        "fun f() { return \"field\"; }\n"
        "a.m = f;\n"
        "print a.m();\n"
    )
    run_source(source)
    assert output_lines(capsys) == ["method", "field"]


def test_bound_method_remembers_instance(capsys):
    source = (
        "class Person {\n"
        "    init(name) { this.name = name; }\n"
        "    greet() { print \"hi \" + this.name; }\n"
        "}\n"
        "var greet = Person(\"jane\").greet;\n"
        "greet();\n"
    )
    run_source(source)
    assert output_lines(capsys) == ["hi jane"]


def test_this_inside_nested_function(capsys):
    source = (
        "class Thing {\n"
        "    getCallback() {\n"
        "        fun localFunction() { print this; }\n"
        "        return localFunction;\n"
        "    }\n"
        "}\n"
        "var callback = Thing().getCallback();\n"
        "callback();\n"
    )
    run_source(source)
    assert output_lines(capsys) == ["Thing instance"]


def test_initializer_returns_instance(capsys):
    """
    Calling init directly, or returning early from it, still yields the instance.
    """
    source = (
        "class Foo {\n"
        "    init() { this.n = 1; return; }\n"
        "}\n"
        "var foo = Foo();\n"
        "print foo.init();\n"
        "print foo.n;\n"
    )
    run_source(source)
    assert output_lines(capsys) == ["Foo instance", "1"]


def test_class_arity_comes_from_init():
    with pytest.raises(ArityException) as excinfo:
        run_source("class P { init(a, b) {} }\nP(1);")
    assert excinfo.value.message == "Expected 2 arguments but got 1."
    assert excinfo.value.line == 2


def test_class_without_init_takes_no_arguments():
    with pytest.raises(ArityException):
        run_source("class E {}\nE(1);")


def test_inherited_methods(capsys):
    source = (
        "class Doughnut { cook() { print \"Fry until golden brown.\"; } }\n"
        "class BostonCream < Doughnut {}\n"
        "BostonCream().cook();\n"
    )
    run_source(source)
    assert output_lines(capsys) == ["Fry until golden brown."]


def test_super_dispatch_is_static_across_three_levels(capsys):
    """
    super refers to the parent of the class the method was declared in,
    not the parent of the receiver's class.
    """
    source = (
        "class A { method() { print \"A method\"; } }\n"
        "class B < A {\n"
        "    method() { print \"B method\"; }\n"
        "    test() { super.method(); }\n"
        "}\n"
        "class C < B {}\n"
        "C().test();\n"
    )
    run_source(source)
    assert output_lines(capsys) == ["A method"]


def test_super_chain_through_initializers(capsys):
    source = (
        "class Base { init(v) { this.v = v; } describe() { return \"base \" + this.v; } }\n"
        "class Mid < Base {\n"
        "    init(v) { super.init(v + \"!\"); }\n"
        "    describe() { return \"mid \" + super.describe(); }\n"
        "}\n"
        "class Top < Mid { describe() { return \"top \" + super.describe(); } }\n"
        "print Top(\"x\").describe();\n"
    )
    run_source(source)
    assert output_lines(capsys) == ["top mid base x!"]


def test_super_method_can_be_stored(capsys):
    source = (
        "class A { say() { print \"A\"; } }\n"
        "class B < A { get() { return super.say; } }\n"
        "var say = B().get();\n"
        "say();\n"
    )
    run_source(source)
    assert output_lines(capsys) == ["A"]


def test_undefined_property():
    with pytest.raises(UndefinedPropertyException) as excinfo:
        run_source("class A {}\nA().missing;")
    assert excinfo.value.message == "Undefined property 'missing'."


def test_undefined_super_method():
    with pytest.raises(UndefinedPropertyException):
        run_source("class A {}\nclass B < A { m() { super.nope(); } }\nB().m();")


def test_superclass_must_be_a_class():
    with pytest.raises(SuperclassException) as excinfo:
        run_source("var NotAClass = 1;\nclass B < NotAClass {}")
    assert excinfo.value.message == "Superclass must be a class."
    assert excinfo.value.line == 2


@pytest.mark.parametrize(
    "source, message",
    [
        ("var x = 1; print x.field;", "Only instances have properties."),
        ("var x = 1; x.field = 2;", "Only instances have fields."),
    ],
)
def test_properties_only_on_instances(source, message):
    with pytest.raises(LoxRuntimeException) as excinfo:
        run_source(source)
    assert excinfo.value.message == message


def test_class_can_refer_to_itself(capsys):
    source = (
        "class Node {\n"
        "    init(next) { this.next = next; }\n"
        "    make() { return Node(this); }\n"
        "}\n"
        "print Node(nil).make().next.next;\n"
    )
    run_source(source)
    assert output_lines(capsys) == ["nil"]
