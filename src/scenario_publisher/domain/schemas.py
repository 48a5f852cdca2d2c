"""
Data schemas: signature snapshot 과 diff 결과.

규칙:
- Signature 는 exporter 만 생성, 생성 후 불변 (frozen)
- node handle 은 비교/직렬화에서 제외 (실행마다 달라짐)
- DiffEntry 는 differ 만 생성, 불변
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# =============================================================================
# Signature
# =============================================================================

@dataclass(frozen=True)
class ParameterSignature:
    """파라미터 하나의 공개 형태."""
    name: str
    default: str | None = None  # Value.to_source() 결과

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "default": self.default}

    @classmethod
    def from_dict(cls, data: Any) -> "ParameterSignature":
        if not isinstance(data, dict):
            raise ValueError(f"parameter must be a mapping, got {type(data).__name__}")
        return cls(
            name=_required_str(data, "name"),
            default=_optional_str(data, "default"),
        )


@dataclass(frozen=True)
class Signature:
    """
    액션워드의 비교 가능한 공개 형태.

    - shape: 파라미터 (이름, 기본값) 순서열
    - body_hash: 정규화된 본문 fingerprint (shape-only export 에서는 None)
    """
    name: str
    parameters: tuple[ParameterSignature, ...] = ()
    uid: str | None = None
    body_hash: str | None = None
    node: int | None = field(default=None, compare=False)

    @property
    def shape(self) -> tuple[tuple[str, str | None], ...]:
        return tuple((p.name, p.default) for p in self.parameters)

    def to_dict(self) -> dict[str, Any]:
        """snapshot 직렬화용 (키 순서 고정)."""
        return {
            "name": self.name,
            "uid": self.uid,
            "parameters": [p.to_dict() for p in self.parameters],
            "body_hash": self.body_hash,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Signature":
        """
        snapshot 항목 → Signature.

        Raises:
            ValueError: 구조/타입이 맞지 않을 때
        """
        if not isinstance(data, dict):
            raise ValueError(f"signature must be a mapping, got {type(data).__name__}")
        parameters = data.get("parameters") or []
        if not isinstance(parameters, list):
            raise ValueError("parameters must be a list")
        return cls(
            name=_required_str(data, "name"),
            parameters=tuple(ParameterSignature.from_dict(p) for p in parameters),
            uid=_optional_str(data, "uid"),
            body_hash=_optional_str(data, "body_hash"),
        )


def _required_str(data: dict, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise ValueError(f"{key!r} must be a non-empty string")
    return value


def _optional_str(data: dict, key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{key!r} must be a string or null")
    return value


# =============================================================================
# Diff
# =============================================================================

class DiffCategory(str, Enum):
    """diff 분류. unchanged 는 결과에 포함하지 않음."""
    DELETED = "deleted"
    CREATED = "created"
    RENAMED = "renamed"
    SIGNATURE_CHANGED = "signature_changed"


@dataclass(frozen=True)
class DiffEntry:
    """diff 결과 항목 하나."""
    category: DiffCategory
    name: str
    new_name: str | None = None
    node: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        if self.new_name is not None:
            data["new_name"] = self.new_name
        return data


@dataclass
class SignatureDiff:
    """
    분류된 diff.

    두 snapshot 의 모든 액션워드 이름은 정확히 한 분류에 속하거나 (암묵적) unchanged.
    """
    deleted: list[DiffEntry] = field(default_factory=list)
    created: list[DiffEntry] = field(default_factory=list)
    renamed: list[DiffEntry] = field(default_factory=list)
    signature_changed: list[DiffEntry] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.deleted or self.created or self.renamed or self.signature_changed)

    def entries(self) -> list[DiffEntry]:
        return [*self.deleted, *self.created, *self.renamed, *self.signature_changed]

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        """비어있지 않은 분류만 포함."""
        groups = {
            DiffCategory.DELETED.value: self.deleted,
            DiffCategory.CREATED.value: self.created,
            DiffCategory.RENAMED.value: self.renamed,
            DiffCategory.SIGNATURE_CHANGED.value: self.signature_changed,
        }
        return {
            category: [entry.to_dict() for entry in entries]
            for category, entries in groups.items()
            if entries
        }
