"""
Signature exporter: enrichment 가 끝난 그래프 → {액션워드 이름: Signature}.

- 결과는 이름순 정렬 (선언 순서 같은 겉모양에 무관)
- 파라미터는 선언 순서 유지
- uid 는 입력값 그대로 (생성하지 않음)
"""

from scenario_publisher.core.hashing import compute_body_hash
from scenario_publisher.core.reporter import Reporter
from scenario_publisher.domain.errors import WarningCodes
from scenario_publisher.domain.nodes import ActionWord, NodeGraph
from scenario_publisher.domain.schemas import ParameterSignature, Signature


def export_signature(
    graph: NodeGraph,
    actionword: ActionWord,
    with_body: bool = True,
    attach_nodes: bool = False,
) -> Signature:
    """액션워드 하나의 Signature."""
    return Signature(
        name=actionword.name,
        uid=actionword.uid,
        parameters=tuple(
            ParameterSignature(
                name=parameter.name,
                default=None if parameter.default is None else parameter.default.to_source(),
            )
            for parameter in graph.parameters_of(actionword)
        ),
        body_hash=compute_body_hash(graph, actionword) if with_body else None,
        node=actionword.handle if attach_nodes else None,
    )


def export_signatures(
    graph: NodeGraph,
    reporter: Reporter | None = None,
    with_body: bool = True,
    attach_nodes: bool = False,
) -> dict[str, Signature]:
    """
    모든 액션워드의 Signature.

    Args:
        graph: enrichment 가 끝난 그래프
        reporter: 경고 수집기
        with_body: body fingerprint 포함 여부 (False → 이름 + 파라미터만)
        attach_nodes: Signature.node 에 handle 첨부 (diff 결과에서 노드 참조용)

    Returns:
        이름순 정렬된 {이름: Signature}
    """
    reporter = reporter or Reporter()
    signatures: dict[str, Signature] = {}

    for actionword in graph.actionwords():
        if actionword.name in signatures:
            reporter.warn(
                WarningCodes.DUPLICATE_ACTIONWORD,
                f"Action word {actionword.name!r} is declared more than once, keeping the first",
                node=actionword.handle,
            )
            continue
        signatures[actionword.name] = export_signature(graph, actionword, with_body, attach_nodes)

    return dict(sorted(signatures.items()))
