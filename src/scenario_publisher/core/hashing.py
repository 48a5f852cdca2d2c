"""
해시 계산: body fingerprint

규칙:
- 같은 논리적 본문 → 같은 fingerprint (node handle 등 우연한 값은 제외)
- 정렬된 키로 직렬화
- SHA-256
"""

import hashlib
import json
from typing import Any

from scenario_publisher.domain.nodes import (
    ActionWord,
    Argument,
    Call,
    NodeGraph,
    Parameter,
    Scenario,
    Step,
)


def canonical_step(graph: NodeGraph, handle: int) -> dict[str, Any]:
    """
    스텝 하나를 정규 구조로 변환.

    - Step: {"step": key, "value": ...}
    - Call: {"call": 액션워드 이름, "annotation": ..., "arguments": [[key, value], ...]}
      인자 key는 바인딩된 파라미터 이름 → 지정된 이름 → 위치 순으로 결정
      synthesized(기본값 보완) 인자는 제외

    Raises:
        GraphInvariantError: handle이 Step/Call 이 아닐 때
    """
    node = graph.node(handle)

    if isinstance(node, Step):
        return {"step": node.key, "value": node.value.canonical()}

    call = graph.get(handle, Call)
    keys = {
        argument.handle: _argument_key(graph, argument, position)
        for position, argument in enumerate(graph.arguments_of(call))
    }
    # 바인딩된 인자는 파라미터 선언 순서 (작성 순서와 무관)
    arguments = []
    for argument_handle in call.ordered_arguments or call.arguments:
        argument = graph.get(argument_handle, Argument)
        if argument.synthesized:
            continue
        arguments.append([keys[argument_handle], argument.value.canonical()])

    return {
        "call": call.actionword,
        "annotation": call.real_annotation or call.annotation,
        "arguments": arguments,
    }


def _argument_key(graph: NodeGraph, argument: Argument, position: int) -> str:
    if argument.parameter is not None:
        return graph.get(argument.parameter, Parameter).name
    if argument.name is not None:
        return argument.name
    return f"#{position}"


def canonical_body(graph: NodeGraph, owner: Scenario | ActionWord) -> list[dict[str, Any]]:
    """본문 전체의 정규 구조 (선언 순서 유지)."""
    return [canonical_step(graph, handle) for handle in owner.steps]


def compute_body_hash(graph: NodeGraph, owner: Scenario | ActionWord) -> str:
    """
    본문 fingerprint 계산.

    Args:
        graph: enrichment 가 끝난 그래프
        owner: 본문을 가진 ActionWord 또는 Scenario

    Returns:
        SHA-256 해시 문자열
    """
    return compute_structure_hash(canonical_body(graph, owner))


def compute_structure_hash(data: Any) -> str:
    """정렬된 키로 JSON 직렬화 후 SHA-256."""
    serialized = json.dumps(data, sort_keys=True, ensure_ascii=False)
    return hashlib.sha256(serialized.encode()).hexdigest()
