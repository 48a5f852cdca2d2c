"""
Enrichment pipeline: 고정 순서의 구조 pass.

순서 (바꾸거나 건너뛰면 하위 불변식이 깨짐):
1. link_parents            - parent handle 부여 (이후 모든 상향 탐색의 전제)
2. add_parameter_types     - 파라미터 타입 추론
3. bind_call_arguments     - 호출 인자 ↔ 파라미터 바인딩
4. add_default_arguments   - 기본값 인자 합성
5. normalize_gherkin_steps - Gherkin 표기 정규화

비치명적 문제는 Reporter 에 경고로 수집되어 반환되고,
불변식 위반(GraphInvariantError)만 전체 실행을 중단시킨다.
"""

import logging
from collections.abc import Callable

from scenario_publisher.core.reporter import Reporter
from scenario_publisher.domain.errors import EnrichmentWarning, GraphInvariantError
from scenario_publisher.domain.nodes import NodeGraph

from .call_arguments import bind_call_arguments
from .default_arguments import add_default_arguments
from .gherkin import build_gherkin_pattern, normalize_gherkin_steps
from .parameter_types import add_parameter_types
from .parents import link_parents

logger = logging.getLogger(__name__)

EnrichmentPass = Callable[[NodeGraph, Reporter], None]

PASSES: tuple[EnrichmentPass, ...] = (
    link_parents,
    add_parameter_types,
    bind_call_arguments,
    add_default_arguments,
    normalize_gherkin_steps,
)


def enrich_project(graph: NodeGraph, reporter: Reporter | None = None) -> list[EnrichmentWarning]:
    """
    모든 pass를 순서대로 실행.

    Args:
        graph: 파서가 만든 NodeGraph (제자리에서 변경됨)
        reporter: 경고 수집기 (없으면 새로 생성)

    Returns:
        이번 실행에서 수집된 경고 목록

    Raises:
        GraphInvariantError: cycle 등 불변식 위반
    """
    reporter = reporter or Reporter()
    mark = reporter.mark()

    for enrichment_pass in PASSES:
        logger.debug(f"Running enrichment pass {enrichment_pass.__name__}")
        try:
            enrichment_pass(graph, reporter)
        except GraphInvariantError as e:
            reporter.dump_error(e)
            raise

    warnings = reporter.since(mark)
    logger.info(f"Enrichment finished with {len(warnings)} warning(s)")
    return warnings


__all__ = [
    "PASSES",
    "enrich_project",
    "link_parents",
    "add_parameter_types",
    "bind_call_arguments",
    "add_default_arguments",
    "normalize_gherkin_steps",
    "build_gherkin_pattern",
]
