"""
Render layer: 렌더링 대상 결정.

역할:
- 출력 그룹 설정 → (노드, output_id, language, context) 목록 (context.py)
- 이름 규칙 (naming.py)
- 실제 텍스트 생성은 외부 Renderer 협력자 담당
"""

from .context import (
    NodeRenderingContext,
    OutputCategory,
    OutputGroupConfig,
    Renderer,
    build_node_rendering_context,
    render_contexts,
    resolve_rendering_contexts,
)
from .naming import NamingConvention, name_action_word

__all__ = [
    "OutputCategory",
    "OutputGroupConfig",
    "NodeRenderingContext",
    "Renderer",
    "build_node_rendering_context",
    "resolve_rendering_contexts",
    "render_contexts",
    "NamingConvention",
    "name_action_word",
]
