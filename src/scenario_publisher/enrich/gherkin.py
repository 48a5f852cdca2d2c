"""
Pass 5: Gherkin(BDD) 스텝 정규화.

- and/but 주석 → 직전 given/when/then 으로 해석 (Call.real_annotation)
- Call.gherkin_text: 액션워드 이름의 "param" 자리에 인자 값 대입
- ActionWord.gherkin_annotations / gherkin_pattern 계산 (step definition 용)
- Gherkin 키워드로 작성된 Step 이 액션워드 패턴과 일치하면 같은 handle 자리의
  바인딩/기본값 보완이 끝난 Call 로 교체 → 렌더러는 표기법을 구분할 필요 없음
  (캡처한 텍스트는 파라미터 타입에 맞는 리터럴로 변환)
"""

import re

from scenario_publisher.core.reporter import Reporter
from scenario_publisher.domain.constants import (
    GHERKIN_CONTINUATION_KEYWORDS,
    GHERKIN_KEYWORDS,
    GHERKIN_PLACEHOLDER_PATTERN,
    GHERKIN_PRIMARY_KEYWORDS,
    TYPE_BOOL,
    TYPE_FLOAT,
    TYPE_INT,
)
from scenario_publisher.domain.errors import WarningCodes
from scenario_publisher.domain.nodes import (
    ActionWord,
    Argument,
    Call,
    NodeGraph,
    Parameter,
    Scenario,
    Step,
    Value,
    ValueKind,
)
from scenario_publisher.enrich.call_arguments import bind_call
from scenario_publisher.enrich.default_arguments import complete_call

PLACEHOLDER = re.compile(GHERKIN_PLACEHOLDER_PATTERN)
NUMBER_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")


def placeholders(name: str) -> list[str]:
    """액션워드 이름 안의 "param" 목록 (등장 순서)."""
    return PLACEHOLDER.findall(name)


def build_gherkin_pattern(name: str) -> str:
    """
    액션워드 이름 → 앵커된 정규식.

    예: 'the user "name" logs in' → '^the user "(.*)" logs in$'
    """
    pieces = PLACEHOLDER.split(name)
    # split 결과: [리터럴, 캡처, 리터럴, 캡처, ..., 리터럴]
    pattern = "".join(
        re.escape(piece) if i % 2 == 0 else '"(.*)"'
        for i, piece in enumerate(pieces)
    )
    return f"^{pattern}$"


def gherkin_text(graph: NodeGraph, call: Call) -> str:
    """'Given the user "Bob" logs in' 형태의 문장."""
    text = call.actionword
    if call.target is not None:
        values = {
            graph.get(a.parameter, Parameter).name: a.value.display()
            for a in graph.arguments_of(call)
            if a.parameter is not None
        }
        text = PLACEHOLDER.sub(
            lambda m: f'"{values[m.group(1)]}"' if m.group(1) in values else m.group(0),
            text,
        )
    if call.real_annotation:
        return f"{call.real_annotation.capitalize()} {text}"
    return text


def _strip_keyword(text: str, keyword: str) -> str:
    if text.lower().startswith(keyword + " "):
        return text[len(keyword) + 1:].strip()
    return text.strip()


def _rewrite_step(
    graph: NodeGraph,
    step: Step,
    actionwords: list[ActionWord],
    index: dict[str, ActionWord],
    reporter: Reporter,
) -> Call | None:
    """Gherkin Step → Call. 일치하는 액션워드가 없으면 None."""
    text = _strip_keyword(step.value.display(), step.key)

    for actionword in actionwords:
        match = re.match(actionword.gherkin_pattern or build_gherkin_pattern(actionword.name), text)
        if match is None:
            continue

        parameter_names = {p.name for p in graph.parameters_of(actionword)}
        arguments = [
            graph.add(Argument(name=name, value=Value.string(captured))).handle
            for name, captured in zip(placeholders(actionword.name), match.groups())
            if name in parameter_names
        ]
        call = graph.replace(step.handle, Call(
            actionword=actionword.name,
            arguments=arguments,
            annotation=step.key,
        ))
        bind_call(graph, call, index, reporter)
        for argument in graph.arguments_of(call):
            if argument.parameter is not None:
                parameter = graph.get(argument.parameter, Parameter)
                argument.value = typed_value(argument.value.text, parameter.type)
        complete_call(graph, call, reporter)
        return call

    return None


def typed_value(text: str, type_tag: str | None) -> Value:
    """
    Gherkin 문장에서 캡처한 텍스트 → 파라미터 타입에 맞는 리터럴.

    명시적 호출 표기와 같은 Value 가 되도록 int/float → numeric, bool → boolean.
    타입과 맞지 않는 텍스트는 문자열 그대로.
    """
    if type_tag in (TYPE_INT, TYPE_FLOAT) and NUMBER_PATTERN.match(text):
        return Value(ValueKind.NUMERIC, text)
    if type_tag == TYPE_BOOL and text.lower() in ("true", "false"):
        return Value(ValueKind.BOOLEAN, text.lower())
    return Value.string(text)


def normalize_gherkin_steps(graph: NodeGraph, reporter: Reporter | None = None) -> None:
    """Gherkin 주석/문장/패턴 계산 및 Gherkin Step 재작성."""
    reporter = reporter or Reporter()
    actionwords = graph.actionwords()
    index = graph.actionword_index()

    for actionword in actionwords:
        actionword.gherkin_pattern = build_gherkin_pattern(actionword.name)

    used: dict[int, set[str]] = {}
    owners: list[Scenario | ActionWord] = [*graph.scenarios(), *actionwords]

    for owner in owners:
        last_annotation: str | None = None
        for handle in owner.steps:
            node = graph.node(handle)

            if isinstance(node, Step):
                if node.key not in GHERKIN_KEYWORDS:
                    continue
                rewritten = _rewrite_step(graph, node, actionwords, index, reporter)
                if rewritten is None:
                    node.annotation = _resolve(node.key, last_annotation)
                    last_annotation = node.annotation
                    reporter.warn(
                        WarningCodes.UNMATCHED_GHERKIN_STEP,
                        f"Step {node.value.display()!r} matches no action word",
                        node=node.handle,
                    )
                    continue
                node = rewritten

            if not isinstance(node, Call):
                continue

            if node.annotation in GHERKIN_KEYWORDS:
                node.real_annotation = _resolve(node.annotation, last_annotation)
                last_annotation = node.real_annotation
            else:
                node.real_annotation = None
            node.gherkin_text = gherkin_text(graph, node)

            if node.real_annotation and node.target is not None:
                used.setdefault(node.target, set()).add(node.real_annotation)

    for actionword in actionwords:
        actionword.gherkin_annotations = sorted(used.get(actionword.handle, set()))


def _resolve(annotation: str, last_annotation: str | None) -> str:
    if annotation in GHERKIN_PRIMARY_KEYWORDS:
        return annotation
    if annotation in GHERKIN_CONTINUATION_KEYWORDS and last_annotation:
        return last_annotation
    return annotation
