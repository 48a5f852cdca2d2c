"""
Core layer: 파싱, 경고 수집, 해시.

역할:
- XML export → NodeGraph (parser.py)
- 경고/에러 수집 및 외부 sink 전달 (reporter.py)
- 본문 fingerprint (hashing.py)
"""

from .hashing import canonical_body, compute_body_hash, compute_structure_hash
from .parser import XMLParser, parse_project
from .reporter import Reporter, ReportListener

__all__ = [
    # parser
    "XMLParser",
    "parse_project",
    # reporter
    "Reporter",
    "ReportListener",
    # hashing
    "canonical_body",
    "compute_body_hash",
    "compute_structure_hash",
]
