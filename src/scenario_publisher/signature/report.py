"""
Diff report: SignatureDiff → 사람이 읽는 텍스트.

콘솔에 직접 쓰지 않고 문자열만 만든다 (출력은 호출자 담당).
"""

from scenario_publisher.domain.schemas import DiffEntry, SignatureDiff
from scenario_publisher.render.naming import NamingConvention, name_action_word


def pluralize(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def format_diff_report(diff: SignatureDiff) -> str:
    """
    분류별 요약.

    Example:
        1 action word deleted:
        - Old step

        2 action words renamed:
        - A => B
        - C => D
    """
    sections = []

    if diff.deleted:
        sections.append(_section(f"{pluralize(len(diff.deleted), 'action word')} deleted:", diff.deleted))
    if diff.created:
        sections.append(_section(f"{pluralize(len(diff.created), 'action word')} created:", diff.created))
    if diff.renamed:
        lines = [f"{pluralize(len(diff.renamed), 'action word')} renamed:"]
        lines.extend(f"- {entry.name} => {entry.new_name}" for entry in diff.renamed)
        sections.append("\n".join(lines))
    if diff.signature_changed:
        sections.append(_section(
            f"{pluralize(len(diff.signature_changed), 'action word')} which signature changed:",
            diff.signature_changed,
        ))

    if not sections:
        return "No action words changed\n"
    return "\n\n".join(sections) + "\n"


def _section(title: str, entries: list[DiffEntry]) -> str:
    return "\n".join([title, *(f"- {entry.name}" for entry in entries)])


def format_deleted_names(
    diff: SignatureDiff,
    naming: NamingConvention | str = NamingConvention.SNAKE,
) -> list[str]:
    """삭제된 액션워드의 대상 언어 이름 (예: 제거할 stub 메서드)."""
    return [name_action_word(entry.name, naming) for entry in diff.deleted]


def format_renamed_lines(
    diff: SignatureDiff,
    naming: NamingConvention | str = NamingConvention.SNAKE,
) -> list[str]:
    """'old<TAB>new' 형태 (대상 언어 이름 기준)."""
    return [
        f"{name_action_word(entry.name, naming)}\t{name_action_word(entry.new_name or '', naming)}"
        for entry in diff.renamed
    ]
