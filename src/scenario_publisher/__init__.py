"""
scenario-publisher: 테스트 설계 export → 노드 그래프 → 코드 생성 대상 / 액션워드 signature diff.

Layers:
- domain: 에러, 노드 그래프, 스키마
- core: 파서, reporter, 해시
- enrich: enrichment pass
- signature: export / snapshot / diff
- render: 렌더링 대상 결정
"""

from .config import load_config
from .publisher import Publisher

__all__ = [
    "Publisher",
    "load_config",
]

__version__ = "0.1.0"
