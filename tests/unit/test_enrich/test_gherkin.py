"""
test_gherkin.py - Gherkin 정규화 테스트

DoD:
- and/but → 직전 given/when/then
- gherkin_text 에 인자 값 대입
- 패턴 일치 Step → 같은 handle 의 Call 로 교체 (바인딩/기본값 완료)
- 일치 없는 Step → 그대로 두고 UNMATCHED_GHERKIN_STEP
"""

import re
from collections.abc import Callable

import pytest

from scenario_publisher.core.hashing import canonical_body
from scenario_publisher.core.parser import parse_project
from scenario_publisher.core.reporter import Reporter
from scenario_publisher.domain.errors import WarningCodes
from scenario_publisher.domain.nodes import (
    ActionWord,
    Argument,
    Call,
    NodeGraph,
    Parameter,
    Step,
    ValueKind,
)
from scenario_publisher.enrich import enrich_project
from scenario_publisher.enrich.gherkin import build_gherkin_pattern, placeholders

LOGIN = (
    '<actionword><name>the user "name" logs in</name><parameters>'
    "<parameter><name>name</name></parameter>"
    "<parameter><name>remember</name><default><booleanliteral>false</booleanliteral></default></parameter>"
    "</parameters></actionword>"
)


def _scenario(steps: str) -> str:
    return f"<scenario><name>s</name><steps>{steps}</steps></scenario>"


def _action(key: str, text: str) -> str:
    return f"<action><key>{key}</key><value><stringliteral>{text}</stringliteral></value></action>"


def _enriched(xml: str, reporter: Reporter | None = None) -> NodeGraph:
    graph = parse_project(xml)
    enrich_project(graph, reporter)
    return graph


# =============================================================================
# 패턴
# =============================================================================

class TestGherkinPattern:
    def test_placeholders(self):
        assert placeholders('the "a" and "b"') == ["a", "b"]
        assert placeholders("no params") == []

    def test_pattern_captures_values(self):
        pattern = build_gherkin_pattern('the user "name" logs in')

        match = re.match(pattern, 'the user "Bob Smith" logs in')

        assert match is not None
        assert match.groups() == ("Bob Smith",)

    def test_pattern_is_anchored(self):
        pattern = build_gherkin_pattern("I wait")

        assert re.match(pattern, "I wait") is not None
        assert re.match(pattern, "I wait forever") is None
        assert re.match(pattern, "then I wait") is None

    def test_literal_metacharacters_escaped(self):
        pattern = build_gherkin_pattern("price is 1.5 (net)")

        assert re.match(pattern, "price is 1.5 (net)") is not None
        assert re.match(pattern, "price is 105 (net)") is None


# =============================================================================
# 대표 문서
# =============================================================================

class TestSampleProject:
    """enriched_graph fixture 기준."""

    def test_continuation_resolved(self, enriched_graph: NodeGraph):
        simple = enriched_graph.scenarios()[0]
        calls = [enriched_graph.get(h, Call) for h in simple.steps]

        assert [c.annotation for c in calls] == ["given", "when", "then", "and"]
        assert [c.real_annotation for c in calls] == ["given", "when", "then", "then"]

    def test_gherkin_text(self, enriched_graph: NodeGraph):
        simple, water = enriched_graph.scenarios()

        assert enriched_graph.get(simple.steps[0], Call).gherkin_text == \
            'Given I start the coffee machine "en"'
        assert enriched_graph.get(simple.steps[3], Call).gherkin_text == "Then Greet"
        # 주석 없는 호출, variable 인자
        assert enriched_graph.get(water.steps[0], Call).gherkin_text == 'I take "<count>" coffees'

    def test_step_rewritten_in_place(self, enriched_graph: NodeGraph):
        water = enriched_graph.scenarios()[1]
        handle = water.steps[1]

        call = enriched_graph.get(handle, Call)

        assert call.handle == handle
        assert call.parent == water.handle
        assert call.actionword == 'message "text" should be displayed'
        assert call.resolved is True
        assert call.real_annotation == "then"
        assert call.gherkin_text == 'Then message "Fill tank" should be displayed'

        argument = enriched_graph.get(call.ordered_arguments[0], Argument)
        assert argument.value.text == "Fill tank"
        assert argument.parent == handle
        assert enriched_graph.get(argument.parameter, Parameter).name == "text"

    def test_gherkin_annotations(self, enriched_graph: NodeGraph):
        annotations = {a.name: a.gherkin_annotations for a in enriched_graph.actionwords()}

        assert annotations == {
            'I start the coffee machine "lang"': ["given"],
            "I take a coffee": ["when"],
            "coffee should be served": ["then"],
            'I take "count" coffees': [],
            'message "text" should be displayed': ["then"],
            "Greet": ["then"],
        }

    def test_patterns_assigned(self, enriched_graph: NodeGraph):
        for actionword in enriched_graph.actionwords():
            assert actionword.gherkin_pattern == build_gherkin_pattern(actionword.name)


# =============================================================================
# Step 재작성
# =============================================================================

class TestStepRewrite:
    def test_keyword_prefix_stripped(self, project_xml: Callable[..., str]):
        """문장 앞의 키워드는 매칭 전에 제거."""
        graph = _enriched(project_xml(
            scenarios=_scenario(_action("given", 'Given the user "Bob" logs in')),
            actionwords=LOGIN,
        ))

        call = graph.get(graph.scenarios()[0].steps[0], Call)
        assert call.annotation == "given"
        assert call.gherkin_text == 'Given the user "Bob" logs in'

    def test_rewritten_call_completed(self, project_xml: Callable[..., str]):
        """재작성된 호출도 기본값 보완까지 끝난 상태."""
        graph = _enriched(project_xml(
            scenarios=_scenario(_action("when", 'the user "Bob" logs in')),
            actionwords=LOGIN,
        ))

        call = graph.get(graph.scenarios()[0].steps[0], Call)
        ordered = [graph.get(h, Argument) for h in call.ordered_arguments]
        assert [(a.name, a.synthesized) for a in ordered] == [("name", False), ("remember", True)]

    def test_captured_value_follows_parameter_type(self, project_xml: Callable[..., str]):
        """Gherkin 문장과 명시적 호출 → 같은 인자 Value, 같은 본문 구조."""
        coffees = (
            '<actionword><name>I take "count" coffees</name><parameters>'
            "<parameter><name>count</name></parameter>"
            "</parameters></actionword>"
        )
        explicit = (
            "<scenario><name>explicit</name><steps>"
            '<call><actionword>I take "count" coffees</actionword><annotation>given</annotation>'
            "<arguments><argument><value><numericliteral>3</numericliteral></value></argument></arguments></call>"
            "</steps></scenario>"
        )
        written = (
            "<scenario><name>written</name><steps>"
            + _action("given", 'I take "3" coffees')
            + "</steps></scenario>"
        )
        graph = _enriched(project_xml(scenarios=explicit + written, actionwords=coffees))
        first, second = graph.scenarios()

        from_call = graph.get(graph.get(first.steps[0], Call).arguments[0], Argument).value
        from_step = graph.get(graph.get(second.steps[0], Call).arguments[0], Argument).value

        assert from_step == from_call
        assert from_step.kind is ValueKind.NUMERIC
        assert canonical_body(graph, first) == canonical_body(graph, second)

    @pytest.mark.parametrize(
        ("declared", "captured", "kind", "text"),
        [
            ("bool", "True", ValueKind.BOOLEAN, "true"),
            ("float", "2.5", ValueKind.NUMERIC, "2.5"),
            ("int", "many", ValueKind.STRING, "many"),
            ("String", "3", ValueKind.STRING, "3"),
        ],
    )
    def test_captured_value_conversion(
        self,
        declared: str,
        captured: str,
        kind: ValueKind,
        text: str,
        project_xml: Callable[..., str],
    ):
        """선언 타입 기준 변환, 맞지 않는 텍스트는 문자열 유지."""
        flag = (
            '<actionword><name>option is "value"</name><parameters>'
            f"<parameter><name>value</name><type>{declared}</type></parameter>"
            "</parameters></actionword>"
        )
        graph = _enriched(project_xml(
            scenarios=_scenario(_action("given", f'option is "{captured}"')),
            actionwords=flag,
        ))

        call = graph.get(graph.scenarios()[0].steps[0], Call)
        value = graph.get(call.arguments[0], Argument).value
        assert (value.kind, value.text) == (kind, text)

    def test_unmatched_step_kept(self, project_xml: Callable[..., str]):
        reporter = Reporter()
        graph = _enriched(project_xml(
            scenarios=_scenario(
                _action("given", "something unknown")
                + _action("and", "something else")
            ),
            actionwords=LOGIN,
        ), reporter)

        first, second = (graph.get(h, Step) for h in graph.scenarios()[0].steps)
        assert first.annotation == "given"
        assert second.annotation == "given"
        codes = [w.code for w in reporter.warnings]
        assert codes.count(WarningCodes.UNMATCHED_GHERKIN_STEP) == 2

    def test_continuation_after_unmatched_step(self, project_xml: Callable[..., str]):
        """일치하지 않은 Step 도 직전 주석으로 취급."""
        graph = _enriched(project_xml(
            scenarios=_scenario(
                _action("when", "something unknown")
                + '<call><actionword>the user "name" logs in</actionword><annotation>but</annotation>'
                "<arguments><argument><value><stringliteral>Al</stringliteral></value></argument></arguments></call>"
            ),
            actionwords=LOGIN,
        ))

        call = graph.get(graph.scenarios()[0].steps[1], Call)
        assert call.real_annotation == "when"
        assert call.gherkin_text == 'When the user "Al" logs in'

    def test_plain_action_untouched(self, project_xml: Callable[..., str]):
        """Gherkin 키워드가 아닌 action Step 은 재작성 대상 아님."""
        graph = _enriched(project_xml(
            scenarios=_scenario(_action("action", 'the user "Bob" logs in')),
            actionwords=LOGIN,
        ))

        step = graph.get(graph.scenarios()[0].steps[0], Step)
        assert step.annotation is None

    @pytest.mark.parametrize("keyword", ["and", "but"])
    def test_leading_continuation_kept(self, keyword: str, project_xml: Callable[..., str]):
        """직전 주석이 없으면 and/but 그대로."""
        graph = _enriched(project_xml(
            scenarios=_scenario(
                f'<call><actionword>the user "name" logs in</actionword><annotation>{keyword}</annotation>'
                "<arguments><argument><value><stringliteral>Al</stringliteral></value></argument></arguments></call>"
            ),
            actionwords=LOGIN,
        ))

        call = graph.get(graph.scenarios()[0].steps[0], Call)
        assert call.real_annotation == keyword
        login = graph.get(graph.project.actionwords[0], ActionWord)
        assert login.gherkin_annotations == [keyword]
