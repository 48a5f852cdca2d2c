"""
Signature differ: 이전 snapshot(old) vs 새 export(new) 분류.

- deleted: old 에만 있고 rename 대상 없음
- created: new 에만 있고 rename 원본 없음
- renamed: old 에만 있는 이름과 new 에만 있는 이름이 서로 유일한 후보일 때
- signature_changed: 양쪽에 있지만 shape 또는 body_hash 가 다름
- unchanged: 결과에서 제외

rename 후보가 여러 개면 추측하지 않고 deleted + created 로 남긴다.
"""

import logging
from collections.abc import Callable, Mapping

from scenario_publisher.core.reporter import Reporter
from scenario_publisher.domain.errors import WarningCodes
from scenario_publisher.domain.schemas import DiffCategory, DiffEntry, Signature, SignatureDiff

logger = logging.getLogger(__name__)

RenamePredicate = Callable[[Signature, Signature], bool]


# =============================================================================
# Rename predicates
# =============================================================================

def same_shape_and_body(old: Signature, new: Signature) -> bool:
    """기본값: 파라미터 shape 동일 + body_hash 동일 (둘 다 있어야 함)."""
    return (
        old.shape == new.shape
        and old.body_hash is not None
        and old.body_hash == new.body_hash
    )


def same_uid(old: Signature, new: Signature) -> bool:
    """uid 가 같으면 같은 액션워드로 본다."""
    return old.uid is not None and old.uid == new.uid


RENAME_PREDICATES: dict[str, RenamePredicate] = {
    "shape_and_body": same_shape_and_body,
    "uid": same_uid,
}


def signature_changed(old: Signature, new: Signature) -> bool:
    """같은 이름의 두 Signature 가 다른지 (body_hash 는 양쪽에 있을 때만 비교)."""
    if old.shape != new.shape:
        return True
    if old.body_hash is not None and new.body_hash is not None:
        return old.body_hash != new.body_hash
    return False


# =============================================================================
# Diff
# =============================================================================

def diff_signatures(
    old: Mapping[str, Signature],
    new: Mapping[str, Signature],
    same_actionword: RenamePredicate = same_shape_and_body,
    reporter: Reporter | None = None,
) -> SignatureDiff:
    """
    두 Signature 매핑 비교.

    Args:
        old: 이전 snapshot
        new: 새 export
        same_actionword: rename 판정 술어
        reporter: 모호한 rename 경고 수집기

    Returns:
        SignatureDiff (각 분류는 old 이름순)
    """
    reporter = reporter or Reporter()
    diff = SignatureDiff()

    for name in sorted(old.keys() & new.keys()):
        if signature_changed(old[name], new[name]):
            diff.signature_changed.append(DiffEntry(
                DiffCategory.SIGNATURE_CHANGED,
                name=name,
                node=new[name].node,
            ))

    removed = sorted(old.keys() - new.keys())
    added = sorted(new.keys() - old.keys())

    targets = {r: [a for a in added if same_actionword(old[r], new[a])] for r in removed}
    sources = {a: [r for r in removed if r in targets and a in targets[r]] for a in added}

    renamed_sources: set[str] = set()
    renamed_targets: set[str] = set()
    for name in removed:
        candidates = targets[name]
        if len(candidates) == 1 and sources[candidates[0]] == [name]:
            new_name = candidates[0]
            diff.renamed.append(DiffEntry(
                DiffCategory.RENAMED,
                name=name,
                new_name=new_name,
                node=new[new_name].node,
            ))
            renamed_sources.add(name)
            renamed_targets.add(new_name)
        elif candidates:
            reporter.warn(
                WarningCodes.AMBIGUOUS_RENAME,
                f"Action word {name!r} could have been renamed to any of {candidates}",
            )

    for name in added:
        if name not in renamed_targets and len(sources[name]) > 1:
            reporter.warn(
                WarningCodes.AMBIGUOUS_RENAME,
                f"Action word {name!r} could be a rename of any of {sources[name]}",
            )

    diff.deleted = [
        DiffEntry(DiffCategory.DELETED, name=name)
        for name in removed
        if name not in renamed_sources
    ]
    diff.created = [
        DiffEntry(DiffCategory.CREATED, name=name, node=new[name].node)
        for name in added
        if name not in renamed_targets
    ]

    logger.info(
        f"Signature diff: {len(diff.deleted)} deleted, {len(diff.created)} created, "
        f"{len(diff.renamed)} renamed, {len(diff.signature_changed)} changed"
    )
    return diff
