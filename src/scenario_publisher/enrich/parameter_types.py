"""
Pass 2: 파라미터 타입 추론.

best-effort (타입 체커 아님, 실패하지 않음):
- 선언된 타입이 있으면 그대로
- 없으면 첫 번째 근거 채택 (이후 충돌하는 근거는 무시)
  1) 시나리오 datatable 값
  2) 호출 인자, 문서 순서 (이름 → name, 위치 → index)
  3) 기본값 리터럴
- variable 인자는 호출자 파라미터의 타입을 따름 (알 수 있을 때만)
- null 은 근거 아님
- 근거 없음 → 타입 없음 + UNTYPED_PARAMETER 경고
"""

import re

from scenario_publisher.core.reporter import Reporter
from scenario_publisher.domain.constants import TYPE_BOOL, TYPE_FLOAT, TYPE_INT, TYPE_STRING
from scenario_publisher.domain.errors import WarningCodes
from scenario_publisher.domain.nodes import (
    ActionWord,
    Call,
    NodeGraph,
    Parameter,
    Scenario,
    Value,
    ValueKind,
)
from scenario_publisher.enrich.call_arguments import match_parameter

INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


def literal_type(value: Value) -> str | None:
    """리터럴 값의 타입 태그 (variable/null 은 None)."""
    if value.kind in (ValueKind.STRING, ValueKind.TEMPLATE):
        return TYPE_STRING
    if value.kind is ValueKind.NUMERIC:
        return TYPE_INT if INTEGER_PATTERN.match(value.text) else TYPE_FLOAT
    if value.kind is ValueKind.BOOLEAN:
        return TYPE_BOOL
    return None


class _Evidence:
    """파라미터 handle → 첫 번째로 관측된 타입."""

    def __init__(self) -> None:
        self.types: dict[int, str] = {}

    def record(self, parameter: Parameter, type_tag: str | None) -> bool:
        if type_tag is None or parameter.handle in self.types:
            return False
        self.types[parameter.handle] = type_tag
        return True

    def type_of(self, parameter: Parameter) -> str | None:
        return parameter.declared_type or self.types.get(parameter.handle)


def _variable_type(graph: NodeGraph, call: Call, name: str, evidence: _Evidence) -> str | None:
    owner = graph.parent_of(call.handle)
    if not isinstance(owner, (Scenario, ActionWord)):
        return None
    for parameter in graph.parameters_of(owner):
        if parameter.name == name:
            return evidence.type_of(parameter)
    return None


def _collect_call_evidence(graph: NodeGraph, evidence: _Evidence) -> bool:
    index = graph.actionword_index()
    changed = False
    for call in graph.calls():
        target = index.get(call.actionword)
        if target is None:
            continue
        parameters = graph.parameters_of(target)
        for position, argument in enumerate(graph.arguments_of(call)):
            parameter = match_parameter(parameters, argument, position)
            if parameter is None:
                continue
            if argument.value.kind is ValueKind.VARIABLE:
                type_tag = _variable_type(graph, call, argument.value.text, evidence)
            else:
                type_tag = literal_type(argument.value)
            changed |= evidence.record(parameter, type_tag)
    return changed


def add_parameter_types(graph: NodeGraph, reporter: Reporter | None = None) -> None:
    """모든 Parameter.type 설정."""
    reporter = reporter or Reporter()
    evidence = _Evidence()
    parameters = [node for node in graph.walk() if isinstance(node, Parameter)]

    # datatable 값은 시나리오 파라미터의 사용처 → variable 인자 전파 전에 기록
    for scenario in graph.scenarios():
        by_name = {p.name: p for p in graph.parameters_of(scenario)}
        for dataset in scenario.datasets:
            for name, value in dataset.arguments:
                if name in by_name:
                    evidence.record(by_name[name], literal_type(value))

    # variable 인자는 다른 파라미터의 타입이 정해진 뒤에야 근거가 됨 → 변화 없을 때까지 반복
    while _collect_call_evidence(graph, evidence):
        pass

    changed = False
    for parameter in parameters:
        if parameter.default is not None:
            changed |= evidence.record(parameter, literal_type(parameter.default))

    # 기본값으로 정해진 타입도 variable 인자로 전파
    while changed:
        changed = _collect_call_evidence(graph, evidence)

    for parameter in parameters:
        parameter.type = evidence.type_of(parameter)
        if parameter.type is None:
            owner = graph.parent_of(parameter.handle)
            owner_name = getattr(owner, "name", "?")
            reporter.warn(
                WarningCodes.UNTYPED_PARAMETER,
                f"No type evidence for parameter {parameter.name!r} of {owner_name!r}",
                node=parameter.handle,
            )
