"""
Тесты вычислителя AST.

Проверяет семантику подстановки значений, условий и циклов
на уже разобранном дереве.
"""

import pytest

from templet.errors import InvalidTagError, MissingTagError
from templet.template.evaluator import TemplateEvaluator
from templet.template.nodes import ElifNode, ElseNode, ForNode, IfNode, TextNode, ValueNode
from templet.template.parser import parse_template
from templet.types import RenderOptions


def evaluate(text, environment, options=None):
    return TemplateEvaluator(options=options).evaluate(parse_template(text), environment)


class TestValues:
    def test_text_only(self, env):
        assert evaluate("hello world", env()) == "hello world"

    def test_missing_value_renders_nothing(self, env):
        assert evaluate("hello, {$first_name} {$last_name}", env()) == "hello,  "

    def test_values(self, env):
        assert evaluate(
            "hello, {$first_name} {$last_name}", env(first_name="john", last_name="doe")
        ) == "hello, john doe"

    def test_indices(self, env):
        environment = env(items=["first", "second", "third"])

        assert evaluate(
            "Items in a list: {$ items[0] }, {$ items[1] }, {$ items[2] }", environment
        ) == "Items in a list: first, second, third"
        assert evaluate("{$ items[00] }{$ items[02] }", environment) == "firstthird"
        assert evaluate("Items in a list: {$ items[3] }", environment) == "Items in a list: "

    def test_nested_lists(self, env):
        environment = env(items=[["one", "two", "three"], ["four", "five", "six"]])
        assert evaluate("{$ items[0][1] } {$ items[1][1] }", environment) == "two five"

    def test_print_map_fails(self, env):
        with pytest.raises(InvalidTagError):
            evaluate("{$ config.server }", env(config={"server": {"ips": ["1", "2"]}}))

    def test_strict_missing(self, env):
        """В строгом режиме отсутствующее значение — ошибка."""
        with pytest.raises(MissingTagError, match="'name' not found"):
            evaluate("{$name}", env(), RenderOptions(strict=True))

    def test_strict_does_not_affect_conditions(self, env):
        assert evaluate("{% if name %}x{% endif %}y", env(), RenderOptions(strict=True)) == "y"


class TestConditions:
    TEMPLATE = (
        "{% if debug %}Debug mode{% elif test %}Test mode"
        "{% elif gravity %}Gravity mode{% else %}Release mode{% endif %}"
    )

    def test_else_branch(self, env):
        assert evaluate(self.TEMPLATE, env()) == "Release mode"

    @pytest.mark.parametrize("flag,expected", [
        ("debug", "Debug mode"),
        ("test", "Test mode"),
        ("gravity", "Gravity mode"),
    ])
    def test_first_bound_branch_wins(self, env, flag, expected):
        assert evaluate(self.TEMPLATE, env(**{flag: "true"})) == expected

    def test_earlier_branch_has_priority(self, env):
        assert evaluate(self.TEMPLATE, env(test="1", debug="1")) == "Debug mode"

    def test_value_is_not_inspected(self, env):
        """Условие проверяет только наличие значения, не его содержимое."""
        assert evaluate("{% if flag %}yes{% endif %}", env(flag="false")) == "yes"
        assert evaluate("{% if flag %}yes{% endif %}", env(flag="")) == "yes"

    def test_nested_if(self, env):
        text = "{% if debug %}Debug mode{% if test %}Test mode{% endif %}"

        assert evaluate(text, env(debug="1")) == "Debug mode"
        assert evaluate(text, env(debug="1", test="1")) == "Debug modeTest mode"
        assert evaluate(text, env(test="1")) == ""

    def test_nested_if_in_elif(self, env):
        text = (
            "{% if debug %}Debug mode{% elif test %}Test mode"
            "{% if gravity %}Gravity{% endif %}{% endif %}"
        )
        assert evaluate(text, env(test="1", gravity="1")) == "Test modeGravity"

    def test_path_condition(self, env):
        environment = env(config={"servers": [{"hostname": "localhost"}]})

        assert evaluate(
            "{% if config.servers[0].hostname %}{$ config.servers[0].hostname }{% endif %}",
            environment,
        ) == "localhost"
        assert evaluate(
            "{% if config.servers[1].hostname %}{$ config.servers[1].hostname }{% endif %}",
            environment,
        ) == ""

    def test_stray_branch_nodes(self, env):
        """Ветви elif/else вне IfNode отклоняются вычислителем."""
        evaluator = TemplateEvaluator()
        with pytest.raises(InvalidTagError, match="Elif without if"):
            evaluator.evaluate([ElifNode("a", [TextNode("x")])], env())
        with pytest.raises(InvalidTagError, match="Else without if"):
            evaluator.evaluate([ElseNode([TextNode("x")])], env())

    def test_malformed_if_children(self, env):
        node = IfNode("a", [ElseNode([]), ElseNode([])])
        with pytest.raises(InvalidTagError, match="Multiple else"):
            TemplateEvaluator().evaluate([node], env())


class TestLoops:
    def test_list(self, env):
        assert evaluate(
            "Users: {% for users as user %}{$ user },{% endfor %}",
            env(users=["John", "Jane", "Mark", "Mary"]),
        ) == "Users: John,Jane,Mark,Mary,"

    def test_empty_list(self, env):
        assert evaluate("[{% for xs as x %}{$x}{% endfor %}]", env(xs=[])) == "[]"

    def test_dot_notation_source(self, env):
        environment = env(users={"active": ["John", "Jane"], "inactive": ["Mark", "Mary"]})
        assert evaluate(
            "Users: {% for users.active as user %}{$ user },{% endfor %}", environment
        ) == "Users: John,Jane,"

    def test_index_source(self, env):
        environment = env(groups=[[["John", "Jane"], ["Mark", "Mary"]]])

        assert evaluate(
            "Users: {% for groups[0][1] as user %}{$ user },{% endfor %}", environment
        ) == "Users: Mark,Mary,"
        assert evaluate(
            "Users: {% for groups[0] as user %}{$ user[0] },{% endfor %}", environment
        ) == "Users: John,Mark,"

    def test_inner_loop(self, env):
        environment = env(users=[["John", "Jane"], ["Mark", "Mary"]])
        assert evaluate(
            "Users: {% for users as _users %}{% for _users as user %}{$ user },"
            "{% endfor %}{% endfor %}",
            environment,
        ) == "Users: John,Jane,Mark,Mary,"

    def test_list_of_maps(self, env):
        environment = env(servers=[
            {"name": "stream-server", "ip": "192.168.101.1"},
            {"name": "game-server", "ip": "192.168.101.100"},
        ])
        assert evaluate(
            "{% for servers as server %}{$ server.ip },{$ server.name }<br>{% endfor %}",
            environment,
        ) == "192.168.101.1,stream-server<br>192.168.101.100,game-server<br>"

    def test_list_of_maps_of_lists(self, env):
        environment = env(servers=[{"users": ["John", "Jane"]}, {"users": ["Mark", "Mary"]}])
        assert evaluate(
            "{% for servers as server %}{% for server.users as user %}{$ user },"
            "{% endfor %}{% endfor %}",
            environment,
        ) == "John,Jane,Mark,Mary,"

    def test_alias_not_visible_after_loop(self, env):
        assert evaluate("{% for xs as x %}{% endfor %}[{$x}]", env(xs=["a"])) == "[]"

    def test_alias_collides_with_global(self, env):
        with pytest.raises(InvalidTagError, match="collides"):
            evaluate(
                "Users: {% for users as user %}{$ user }{% endfor %}",
                env(users=["John"], user="root"),
            )

    def test_alias_collides_with_outer_alias(self, env):
        with pytest.raises(InvalidTagError, match="collides"):
            evaluate(
                "{% for xs as x %}{% for xs as x %}{% endfor %}{% endfor %}",
                env(xs=["a"]),
            )

    def test_missing_source(self, env):
        with pytest.raises(MissingTagError):
            evaluate("{% for users as user %}{% endfor %}", env())

    def test_scalar_source(self, env):
        with pytest.raises(InvalidTagError, match="must reference a list"):
            evaluate("{% for users as user %}{% endfor %}", env(users="root"))

    def test_ast_is_reusable(self, env):
        """Одно и то же дерево вычисляется с разными окружениями."""
        ast = [ForNode("xs", "x", [ValueNode("x")])]
        evaluator = TemplateEvaluator()

        assert evaluator.evaluate(ast, env(xs=["a", "b"])) == "ab"
        assert evaluator.evaluate(ast, env(xs=["c"])) == "c"
        assert ast == [ForNode("xs", "x", [ValueNode("x")])]

    def test_alias_collision_checked_for_empty_list(self, env):
        with pytest.raises(InvalidTagError, match="collides"):
            evaluate("{% for xs as x %}{% endfor %}", env(xs=[], x="z"))
