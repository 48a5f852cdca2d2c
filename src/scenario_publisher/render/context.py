"""
Rendering context resolver: 어떤 노드를 어떤 출력 식별자로 렌더할지 결정.

역할:
- 출력 그룹 설정(category, language, 파일명 규칙) → NodeRenderingContext 목록
- 같은 (language, output_id) 는 한 번만 → 출력 대상 유일성 보장
- I/O 없음, 렌더링 없음 (텍스트 생성은 외부 Renderer 담당)
"""

import posixpath
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from scenario_publisher.core.reporter import Reporter
from scenario_publisher.domain.errors import (
    ConfigError,
    ErrorCodes,
    GraphInvariantError,
    WarningCodes,
)
from scenario_publisher.domain.nodes import ActionWord, Node, NodeGraph, Project, Scenario
from scenario_publisher.render.naming import NamingConvention, name_action_word


class OutputCategory(str, Enum):
    TEST_CODE = "test_code"
    ACTIONWORDS_STUBS = "actionwords_stubs"


@dataclass(frozen=True)
class OutputGroupConfig:
    """
    출력 그룹 하나의 설정.

    filename 과 named_filename 중 정확히 하나:
    - filename: 프로젝트 전체를 파일 하나로 (예: "actionwords.py")
    - named_filename: 시나리오/액션워드마다 파일 하나 (예: "test_{name}.py")
    """
    category: OutputCategory
    language: str
    filename: str | None = None
    named_filename: str | None = None
    naming: NamingConvention = NamingConvention.SNAKE
    output_directory: str = ""
    context: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if (self.filename is None) == (self.named_filename is None):
            raise ConfigError(
                ErrorCodes.INVALID_OUTPUT_CONFIG,
                language=self.language,
                category=self.category.value,
                reason="exactly one of filename / named_filename is required",
            )
        if self.named_filename is not None and "{name}" not in self.named_filename:
            raise ConfigError(
                ErrorCodes.INVALID_OUTPUT_CONFIG,
                language=self.language,
                named_filename=self.named_filename,
                reason="named_filename must contain {name}",
            )

    @property
    def per_node(self) -> bool:
        return self.named_filename is not None

    def output_id(self, name: str | None = None) -> str:
        if self.named_filename is not None:
            filename = self.named_filename.format(name=name or "")
        else:
            filename = self.filename or ""
        if self.output_directory:
            return posixpath.join(self.output_directory, filename)
        return filename


@dataclass(frozen=True)
class NodeRenderingContext:
    """렌더할 파일 하나."""
    node: int
    output_id: str
    language: str
    category: OutputCategory
    context: Mapping[str, Any] = field(default_factory=dict)
    description: str = ""


class Renderer(Protocol):
    """외부 렌더링 협력자. 반환된 텍스트는 검사하지 않는다."""

    def render(self, node: Node, language: str, context: Mapping[str, Any]) -> str: ...


# =============================================================================
# Resolution
# =============================================================================

def _targets(graph: NodeGraph, group: OutputGroupConfig) -> list[int]:
    project = graph.project
    if not group.per_node:
        return [project.handle]
    if group.category is OutputCategory.TEST_CODE:
        return list(project.scenarios)
    return list(project.actionwords)


def build_node_rendering_context(
    graph: NodeGraph,
    group: OutputGroupConfig,
    handle: int,
) -> NodeRenderingContext:
    """
    노드 하나의 렌더링 컨텍스트.

    Raises:
        GraphInvariantError: 이름 없는 노드 (Project/Scenario/ActionWord 아님)
    """
    node = graph.node(handle)
    if not isinstance(node, (Project, Scenario, ActionWord)):
        raise GraphInvariantError(
            ErrorCodes.GRAPH_WRONG_KIND,
            node=handle,
            expected="Project | Scenario | ActionWord",
            actual=type(node).__name__,
        )

    identifier = name_action_word(node.name, group.naming) or f"{node.kind.value}_{handle}"
    context: dict[str, Any] = {
        **group.context,
        "category": group.category.value,
        "language": group.language,
        "naming": group.naming.value,
        "node_kind": node.kind.value,
        "name": identifier,
    }
    if isinstance(node, Project):
        if group.category is OutputCategory.TEST_CODE:
            context["scenarios"] = list(node.scenarios)
        else:
            context["actionwords"] = list(node.actionwords)

    return NodeRenderingContext(
        node=handle,
        output_id=group.output_id(identifier if group.per_node else None),
        language=group.language,
        category=group.category,
        context=context,
        description=f"{group.category.value} for {node.kind.value} {node.name!r}",
    )


def resolve_rendering_contexts(
    graph: NodeGraph,
    groups: Iterable[OutputGroupConfig],
    reporter: Reporter | None = None,
) -> list[NodeRenderingContext]:
    """
    모든 출력 그룹의 렌더링 컨텍스트 (설정 순서 → 노드 선언 순서).

    같은 (language, output_id) 가 같은 노드로 다시 나오면 생략,
    다른 노드와 충돌하면 먼저 나온 쪽을 유지하고 OUTPUT_COLLISION 경고.
    """
    reporter = reporter or Reporter()
    seen: dict[tuple[str, str], int] = {}
    contexts: list[NodeRenderingContext] = []

    for group in groups:
        for handle in _targets(graph, group):
            rendering_context = build_node_rendering_context(graph, group, handle)
            key = (rendering_context.language, rendering_context.output_id)
            if key in seen:
                if seen[key] != handle:
                    reporter.warn(
                        WarningCodes.OUTPUT_COLLISION,
                        f"{rendering_context.output_id!r} ({rendering_context.language}) "
                        f"is already produced by another node",
                        node=handle,
                    )
                continue
            seen[key] = handle
            contexts.append(rendering_context)

    return contexts


def render_contexts(
    graph: NodeGraph,
    contexts: Iterable[NodeRenderingContext],
    renderer: Renderer,
) -> list[tuple[str, str]]:
    """외부 Renderer 호출 → (output_id, 텍스트) 목록. 파일은 쓰지 않음."""
    return [
        (
            rendering_context.output_id,
            renderer.render(
                graph.node(rendering_context.node),
                rendering_context.language,
                rendering_context.context,
            ),
        )
        for rendering_context in contexts
    ]
