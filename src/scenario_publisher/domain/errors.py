"""
Error definitions for the publisher.

규칙:
- 조용한 실패 금지 → 치명적 오류는 PublisherError 하위 클래스로 명시적 실패
- 비치명적 문제(미해결 호출, 타입 미추론 등)는 EnrichmentWarning으로 수집
- 원인 노드가 있으면 handle을 함께 전달
"""

from dataclasses import dataclass
from typing import Any


class PublisherError(Exception):
    """
    파이프라인을 중단시키는 에러의 기반 클래스.

    Usage:
        raise ParseError(ErrorCodes.PARSE_ERROR_STRUCTURE, element="scenario", missing="name")
    """

    def __init__(self, code: str, node: int | None = None, **context: Any) -> None:
        self.code = code
        self.node = node
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        items = dict(self.context)
        if self.node is not None:
            items["node"] = self.node
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in items.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            "node": self.node,
            **self.context,
        }


class ParseError(PublisherError):
    """입력 문서가 잘못되었거나 필수 요소가 빠짐. enrichment 전에 중단."""


class SnapshotLoadError(PublisherError):
    """이전 signature snapshot을 읽을 수 없음. 처리 정책은 호출자가 결정."""


class SerializationError(PublisherError):
    """signature가 round-trip 되지 않음. diff 계약이 깨지므로 치명적."""


class GraphInvariantError(PublisherError):
    """노드 그래프 불변식 위반 (cycle, 잘못된 노드 종류 등)."""


class ConfigError(PublisherError):
    """출력 그룹 설정 오류."""


# =============================================================================
# Warnings
# =============================================================================

@dataclass(frozen=True)
class EnrichmentWarning:
    """비치명적 경고. 수집 후 결과와 함께 반환된다."""
    code: str
    message: str
    node: int | None = None
    level: str = "warning"

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "code": self.code,
            "message": self.message,
            "node": self.node,
        }


# =============================================================================
# Error / Warning Codes
# =============================================================================

class ErrorCodes:
    """치명적 에러 코드."""

    # === Parse ===
    PARSE_ERROR_XML = "PARSE_ERROR_XML"
    PARSE_ERROR_STRUCTURE = "PARSE_ERROR_STRUCTURE"
    PARSE_ERROR_REFERENCE = "PARSE_ERROR_REFERENCE"

    # === Graph ===
    GRAPH_CYCLE = "GRAPH_CYCLE"
    GRAPH_UNKNOWN_HANDLE = "GRAPH_UNKNOWN_HANDLE"
    GRAPH_WRONG_KIND = "GRAPH_WRONG_KIND"

    # === Snapshot ===
    SNAPSHOT_MISSING = "SNAPSHOT_MISSING"
    SNAPSHOT_CORRUPT = "SNAPSHOT_CORRUPT"
    SNAPSHOT_ROUND_TRIP = "SNAPSHOT_ROUND_TRIP"

    # === Config ===
    INVALID_OUTPUT_CONFIG = "INVALID_OUTPUT_CONFIG"


class WarningCodes:
    """EnrichmentWarning 코드."""

    UNTYPED_PARAMETER = "UNTYPED_PARAMETER"
    UNRESOLVED_CALL = "UNRESOLVED_CALL"
    UNRESOLVED_ARGUMENT = "UNRESOLVED_ARGUMENT"
    MISSING_ARGUMENT = "MISSING_ARGUMENT"
    UNMATCHED_GHERKIN_STEP = "UNMATCHED_GHERKIN_STEP"
    DUPLICATE_ACTIONWORD = "DUPLICATE_ACTIONWORD"
    AMBIGUOUS_RENAME = "AMBIGUOUS_RENAME"
    OUTPUT_COLLISION = "OUTPUT_COLLISION"
