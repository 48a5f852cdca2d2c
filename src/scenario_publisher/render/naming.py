"""
이름 규칙: 시나리오/액션워드 이름 → 대상 언어 식별자/파일명.

예: 'The user "name" logs in'
- snake  → the_user_name_logs_in
- camel  → theUserNameLogsIn
- pascal → TheUserNameLogsIn
- kebab  → the-user-name-logs-in
"""

import re
import unicodedata
from enum import Enum

WORD_PATTERN = re.compile(r"[^\W_]+")


class NamingConvention(str, Enum):
    SNAKE = "snake"
    CAMEL = "camel"
    PASCAL = "pascal"
    KEBAB = "kebab"


def split_words(name: str) -> list[str]:
    """악센트 제거 후 영숫자 단어 목록 (소문자)."""
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return [word.lower() for word in WORD_PATTERN.findall(stripped)]


def name_action_word(name: str, naming: NamingConvention | str = NamingConvention.SNAKE) -> str:
    """
    이름에 naming 규칙 적용.

    Raises:
        ValueError: 알 수 없는 naming 값
    """
    convention = NamingConvention(naming)
    words = split_words(name)
    if not words:
        return ""

    if convention is NamingConvention.SNAKE:
        return "_".join(words)
    if convention is NamingConvention.KEBAB:
        return "-".join(words)
    if convention is NamingConvention.PASCAL:
        return "".join(word.capitalize() for word in words)
    return words[0] + "".join(word.capitalize() for word in words[1:])
