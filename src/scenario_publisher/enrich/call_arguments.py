"""
Pass 3: 호출 인자 바인딩.

- 위치 인자 → index, 이름 인자 → name 으로 대상 파라미터에 바인딩
- 매칭 실패/중복 바인딩 → Argument.unresolved + 경고 (버리지 않음)
- 대상 액션워드가 없으면 Call.resolved = False + 경고 (치명적 아님)
- 매번 바인딩을 초기화하고 다시 계산 → 멱등
"""

from scenario_publisher.core.reporter import Reporter
from scenario_publisher.domain.errors import WarningCodes
from scenario_publisher.domain.nodes import (
    ActionWord,
    Argument,
    Call,
    NodeGraph,
    Parameter,
)


def match_parameter(
    parameters: list[Parameter],
    argument: Argument,
    position: int,
) -> Parameter | None:
    """인자 하나에 대응하는 파라미터 (없으면 None)."""
    if argument.name is not None:
        for parameter in parameters:
            if parameter.name == argument.name:
                return parameter
        return None
    if position < len(parameters):
        return parameters[position]
    return None


def align_arguments(graph: NodeGraph, call: Call, parameters: list[Parameter]) -> None:
    """Call.ordered_arguments = 파라미터 순서로 정렬된 인자 + 미해결 인자."""
    order = {parameter.handle: i for i, parameter in enumerate(parameters)}
    arguments = graph.arguments_of(call)
    bound = sorted(
        (a for a in arguments if a.parameter is not None),
        key=lambda a: order[a.parameter],
    )
    call.ordered_arguments = [
        *(a.handle for a in bound),
        *(a.handle for a in arguments if a.parameter is None),
    ]


def bind_call(
    graph: NodeGraph,
    call: Call,
    index: dict[str, ActionWord],
    reporter: Reporter,
) -> None:
    """호출 하나의 인자 바인딩."""
    arguments = graph.arguments_of(call)
    for argument in arguments:
        argument.parameter = None
        argument.unresolved = False

    target = index.get(call.actionword)
    if target is None:
        call.resolved = False
        call.target = None
        call.ordered_arguments = list(call.arguments)
        reporter.warn(
            WarningCodes.UNRESOLVED_CALL,
            f"Call to unknown action word {call.actionword!r}",
            node=call.handle,
        )
        return

    call.resolved = True
    call.target = target.handle
    parameters = graph.parameters_of(target)

    bound: set[int] = set()
    for position, argument in enumerate(arguments):
        parameter = match_parameter(parameters, argument, position)
        if parameter is None or parameter.handle in bound:
            argument.unresolved = True
            label = argument.name if argument.name is not None else f"#{position}"
            reporter.warn(
                WarningCodes.UNRESOLVED_ARGUMENT,
                f"Argument {label} of call to {call.actionword!r} matches no parameter",
                node=argument.handle,
            )
            continue
        argument.parameter = parameter.handle
        bound.add(parameter.handle)

    align_arguments(graph, call, parameters)


def bind_call_arguments(graph: NodeGraph, reporter: Reporter | None = None) -> None:
    """모든 Call 바인딩."""
    reporter = reporter or Reporter()
    index = graph.actionword_index()
    for call in graph.calls():
        bind_call(graph, call, index, reporter)
