"""
Pass 4: 기본값 인자 보완.

해결된 Call 에서 인자가 없는 파라미터에 기본값이 있으면 명시적 Argument를 합성한다.
이후 소비자(렌더러, 해시)는 호출 시점 기본값을 다시 계산할 필요가 없다.
"""

from scenario_publisher.core.reporter import Reporter
from scenario_publisher.domain.errors import WarningCodes
from scenario_publisher.domain.nodes import ActionWord, Argument, Call, NodeGraph
from scenario_publisher.enrich.call_arguments import align_arguments


def complete_call(graph: NodeGraph, call: Call, reporter: Reporter) -> None:
    """해결된 호출 하나의 누락 인자 보완."""
    if not call.resolved or call.target is None:
        return

    parameters = graph.parameters_of(graph.get(call.target, ActionWord))
    bound = {a.parameter for a in graph.arguments_of(call) if a.parameter is not None}

    for parameter in parameters:
        if parameter.handle in bound:
            continue
        if parameter.default is None:
            reporter.warn(
                WarningCodes.MISSING_ARGUMENT,
                f"Call to {call.actionword!r} has no value for {parameter.name!r}",
                node=call.handle,
            )
            continue
        argument = graph.add(Argument(
            name=parameter.name,
            value=parameter.default,
            parameter=parameter.handle,
            synthesized=True,
        ))
        argument.parent = call.handle
        call.arguments.append(argument.handle)

    align_arguments(graph, call, parameters)


def add_default_arguments(graph: NodeGraph, reporter: Reporter | None = None) -> None:
    """모든 해결된 Call 보완."""
    reporter = reporter or Reporter()
    for call in graph.calls():
        complete_call(graph, call, reporter)
