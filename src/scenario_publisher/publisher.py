"""
Publisher: 파서 → enrichment → signature / 렌더링 컨텍스트 연결.

네트워크, 콘솔 출력, 옵션 파싱은 하지 않는다.
진행 상황은 logging 으로만 남긴다.

Usage:
    publisher = Publisher(load_config(), language="python")
    graph = publisher.build_project(xml_text)
    snapshot_text = publisher.export_signature(graph)
    diff = publisher.diff(previous_snapshot_text, graph)
"""

import logging
from collections.abc import Iterable
from dataclasses import replace
from pathlib import Path

from scenario_publisher.config import parse_output_groups, rename_predicate
from scenario_publisher.core.parser import parse_project
from scenario_publisher.core.reporter import Reporter, ReportListener
from scenario_publisher.domain.constants import SIGNATURE_SNAPSHOT_FILENAME
from scenario_publisher.domain.errors import EnrichmentWarning, SnapshotLoadError
from scenario_publisher.domain.nodes import NodeGraph
from scenario_publisher.domain.schemas import SignatureDiff
from scenario_publisher.enrich import enrich_project
from scenario_publisher.render.context import (
    NodeRenderingContext,
    OutputCategory,
    build_node_rendering_context,
    resolve_rendering_contexts,
)
from scenario_publisher.signature.differ import diff_signatures
from scenario_publisher.signature.exporter import export_signatures
from scenario_publisher.signature.snapshot import dump_snapshot, load_snapshot, write_snapshot

logger = logging.getLogger(__name__)


class Publisher:
    """한 번의 실행에 필요한 구성요소 묶음."""

    def __init__(
        self,
        config: dict | None = None,
        listeners: Iterable[ReportListener] | None = None,
        language: str = "python",
    ):
        self.config = config or {}
        self.language = language
        self.reporter = Reporter(list(listeners or []))

    def add_listener(self, listener: ReportListener) -> None:
        self.reporter.add_listener(listener)

    @property
    def warnings(self) -> list[EnrichmentWarning]:
        return self.reporter.warnings

    def build_project(self, xml_text: str, strict_references: bool = False) -> NodeGraph:
        """
        XML 파싱 + enrichment.

        Raises:
            ParseError: 입력 문서 오류
            GraphInvariantError: 그래프 불변식 위반
        """
        logger.info("Extracting data")
        graph = parse_project(xml_text, self.reporter, strict_references)
        enrich_project(graph, self.reporter)
        return graph

    def export_signature(self, graph: NodeGraph) -> str:
        """현재 액션워드 signature snapshot 텍스트."""
        logger.info("Exporting action word signature")
        return dump_snapshot(export_signatures(graph, self.reporter))

    def write_signature(self, graph: NodeGraph, output_directory: Path) -> Path:
        """output_directory/actionwords_signature.yaml 에 snapshot 기록 (원자적)."""
        path = Path(output_directory) / SIGNATURE_SNAPSHOT_FILENAME
        return write_snapshot(path, export_signatures(graph, self.reporter))

    def diff(self, previous_snapshot: str, graph: NodeGraph) -> SignatureDiff:
        """
        이전 snapshot 대비 diff.

        Raises:
            SnapshotLoadError: 이전 snapshot 을 읽을 수 없음 (정책은 호출자가 결정)
        """
        logger.info("Loading previous definition")
        try:
            old = load_snapshot(previous_snapshot)
        except SnapshotLoadError as e:
            self.reporter.dump_error(e)
            raise

        current = export_signatures(graph, self.reporter, attach_nodes=True)
        return diff_signatures(old, current, rename_predicate(self.config), self.reporter)

    def rendering_contexts(
        self,
        graph: NodeGraph,
        category: OutputCategory | str | None = None,
    ) -> list[NodeRenderingContext]:
        """설정된 출력 그룹의 렌더링 컨텍스트."""
        groups = parse_output_groups(self.config, self.language, category)
        return resolve_rendering_contexts(graph, groups, self.reporter)

    def changed_stub_contexts(
        self,
        graph: NodeGraph,
        diff: SignatureDiff,
    ) -> list[NodeRenderingContext]:
        """
        새로 생겼거나 signature 가 바뀐 액션워드의 stub 렌더링 컨텍스트.

        - named_filename 그룹: 바뀐 액션워드마다 하나
        - filename 그룹: 파일 전체(Project)를 하나만, context["changed_actionwords"] 에 대상 handle
        같은 (language, output_id) 는 한 번만 나온다.

        diff 는 attach_nodes=True 로 export 된 signature 에서 나와야 한다 (self.diff).
        """
        groups = parse_output_groups(self.config, self.language, OutputCategory.ACTIONWORDS_STUBS)
        handles = [
            entry.node
            for entry in [*diff.created, *diff.signature_changed]
            if entry.node is not None
        ]
        if not handles:
            return []

        seen: set[tuple[str, str]] = set()
        contexts: list[NodeRenderingContext] = []
        for group in groups:
            if group.per_node:
                candidates = [build_node_rendering_context(graph, group, h) for h in handles]
            else:
                whole_file = build_node_rendering_context(graph, group, graph.project.handle)
                candidates = [replace(
                    whole_file,
                    context={**whole_file.context, "changed_actionwords": list(handles)},
                )]
            for rendering_context in candidates:
                key = (rendering_context.language, rendering_context.output_id)
                if key in seen:
                    continue
                seen.add(key)
                contexts.append(rendering_context)
        return contexts
