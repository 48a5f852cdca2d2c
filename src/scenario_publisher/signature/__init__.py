"""
Signature layer: 액션워드 API snapshot 추출과 비교.

역할:
- enrichment 가 끝난 그래프 → Signature 매핑 (exporter.py)
- YAML snapshot 직렬화/역직렬화 (snapshot.py)
- old vs new 분류 (differ.py)
- 사람이 읽는 요약 (report.py)
"""

from .differ import (
    RENAME_PREDICATES,
    diff_signatures,
    same_shape_and_body,
    same_uid,
    signature_changed,
)
from .exporter import export_signature, export_signatures
from .report import (
    format_deleted_names,
    format_diff_report,
    format_renamed_lines,
    pluralize,
)
from .snapshot import dump_snapshot, load_snapshot, read_snapshot, write_snapshot

__all__ = [
    # exporter
    "export_signature",
    "export_signatures",
    # snapshot
    "dump_snapshot",
    "load_snapshot",
    "read_snapshot",
    "write_snapshot",
    # differ
    "diff_signatures",
    "same_shape_and_body",
    "same_uid",
    "signature_changed",
    "RENAME_PREDICATES",
    # report
    "format_diff_report",
    "format_deleted_names",
    "format_renamed_lines",
    "pluralize",
]
