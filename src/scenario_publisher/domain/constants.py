"""
Domain Constants: 퍼블리셔 전역 상수.

타입 태그, Gherkin 키워드, snapshot 파일명 등 시스템 전반에서 사용되는 값들.
"""

# =============================================================================
# Parameter Type Tags (파라미터 타입 추론 결과)
# =============================================================================

TYPE_STRING = "String"
TYPE_INT = "int"
TYPE_FLOAT = "float"
TYPE_BOOL = "bool"

# =============================================================================
# Gherkin (BDD 스텝 표기)
# =============================================================================
# and/but 은 직전의 given/when/then 을 이어받는다.

GHERKIN_PRIMARY_KEYWORDS = ("given", "when", "then")
GHERKIN_CONTINUATION_KEYWORDS = ("and", "but")
GHERKIN_KEYWORDS = GHERKIN_PRIMARY_KEYWORDS + GHERKIN_CONTINUATION_KEYWORDS

# 액션워드 이름 안의 "param" 자리표시자
GHERKIN_PLACEHOLDER_PATTERN = r'"([^"]*)"'

# =============================================================================
# Step Keys
# =============================================================================

STEP_ACTION = "action"  # <key> 생략 시 기본값

# =============================================================================
# Snapshot
# =============================================================================

SIGNATURE_SNAPSHOT_FILENAME = "actionwords_signature.yaml"
