"""
Reporter: 경고/에러 수집 및 외부 sink 전달.

규칙:
- 경고 필수 컨텍스트: code, message, node(있으면)
- 경고는 절대 조용히 버리지 않음 → 수집 후 결과와 함께 반환
- 콘솔/파일에 직접 쓰지 않음 → logging + listener 로만 전달
"""

import logging
from typing import Protocol

from scenario_publisher.domain.errors import EnrichmentWarning, PublisherError

logger = logging.getLogger(__name__)


class ReportListener(Protocol):
    """외부 sink 인터페이스."""

    def on_warning(self, warning: EnrichmentWarning) -> None: ...

    def on_error(self, error: PublisherError) -> None: ...


class Reporter:
    """
    경고/에러 수집기.

    Usage:
        reporter = Reporter()
        reporter.warn(WarningCodes.UNRESOLVED_CALL, "Unknown action word 'x'", node=12)
        warnings = reporter.warnings
    """

    def __init__(self, listeners: list[ReportListener] | None = None) -> None:
        self._listeners: list[ReportListener] = list(listeners or [])
        self._warnings: list[EnrichmentWarning] = []

    @property
    def warnings(self) -> list[EnrichmentWarning]:
        """지금까지 수집된 경고 (복사본)."""
        return list(self._warnings)

    def add_listener(self, listener: ReportListener) -> None:
        self._listeners.append(listener)

    def warn(self, code: str, message: str, node: int | None = None) -> EnrichmentWarning:
        """
        경고 이벤트 기록.

        Args:
            code: 경고 코드 (WarningCodes)
            message: 사람이 읽을 메시지
            node: 원인 노드 handle

        Returns:
            기록된 EnrichmentWarning
        """
        warning = EnrichmentWarning(code=code, message=message, node=node)
        self._warnings.append(warning)
        logger.warning(f"[{code}] {message}")
        for listener in self._listeners:
            listener.on_warning(warning)
        return warning

    def dump_error(self, error: PublisherError) -> None:
        """치명적 에러를 로그로 남기고 listener에 전달 (예외는 호출자가 다시 올린다)."""
        logger.error(f"{error}", exc_info=error)
        for listener in self._listeners:
            listener.on_error(error)

    def since(self, mark: int) -> list[EnrichmentWarning]:
        """mark 이후에 기록된 경고."""
        return self._warnings[mark:]

    def mark(self) -> int:
        return len(self._warnings)
