"""
Pass 1: parent 링크.

루트에서 DFS로 모든 노드에 parent handle을 정확히 한 번 부여한다.
이후 모든 pass가 상향 탐색(예: Call → 소속 ActionWord)에 의존하므로 항상 첫 번째.
"""

from scenario_publisher.core.reporter import Reporter
from scenario_publisher.domain.errors import ErrorCodes, GraphInvariantError
from scenario_publisher.domain.nodes import NodeGraph


def link_parents(graph: NodeGraph, reporter: Reporter | None = None) -> None:
    """
    parent 참조 재계산.

    Raises:
        GraphInvariantError: GRAPH_CYCLE (같은 노드에 두 번 도달)
    """
    root = graph.project.handle

    for node in graph:
        node.parent = None

    visited = {root}
    stack = [root]
    while stack:
        handle = stack.pop()
        for child in graph.node(handle).child_handles():
            if child in visited:
                raise GraphInvariantError(ErrorCodes.GRAPH_CYCLE, node=child, parent=handle)
            visited.add(child)
            graph.node(child).parent = handle
            stack.append(child)
