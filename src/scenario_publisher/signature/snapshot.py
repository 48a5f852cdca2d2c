"""
Signature snapshot: YAML 직렬화 / 역직렬화.

규칙:
- 줄 단위 diff 가능한 block-style YAML, 이름순, 키 순서 고정
- dump 직후 다시 load 해서 같은 구조인지 검증 → 아니면 SerializationError
- 읽기 실패 → SnapshotLoadError (처리 정책은 호출자가 결정)
"""

import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path

import yaml

from scenario_publisher.domain.errors import ErrorCodes, SerializationError, SnapshotLoadError
from scenario_publisher.domain.schemas import Signature

logger = logging.getLogger(__name__)


def dump_snapshot(signatures: Mapping[str, Signature]) -> str:
    """
    Signature 매핑 → YAML 텍스트.

    Raises:
        SerializationError: SNAPSHOT_ROUND_TRIP (다시 읽었을 때 같은 구조가 아님)
    """
    data = [signature.to_dict() for _, signature in sorted(signatures.items())]
    text = yaml.safe_dump(
        data,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )

    try:
        reloaded = load_snapshot(text)
    except SnapshotLoadError as e:
        raise SerializationError(ErrorCodes.SNAPSHOT_ROUND_TRIP, reason=str(e)) from e

    if reloaded != dict(signatures):
        mismatched = sorted(
            set(reloaded.keys()) ^ set(signatures.keys())
            | {name for name in reloaded.keys() & signatures.keys() if reloaded[name] != signatures[name]}
        )
        raise SerializationError(ErrorCodes.SNAPSHOT_ROUND_TRIP, names=mismatched)

    return text


def load_snapshot(text: str) -> dict[str, Signature]:
    """
    YAML 텍스트 → Signature 매핑.

    빈 문서는 빈 매핑.

    Raises:
        SnapshotLoadError: SNAPSHOT_CORRUPT
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SnapshotLoadError(ErrorCodes.SNAPSHOT_CORRUPT, reason=str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, list):
        raise SnapshotLoadError(
            ErrorCodes.SNAPSHOT_CORRUPT,
            reason=f"expected a list of signatures, got {type(data).__name__}",
        )

    signatures: dict[str, Signature] = {}
    for position, item in enumerate(data):
        try:
            signature = Signature.from_dict(item)
        except ValueError as e:
            raise SnapshotLoadError(ErrorCodes.SNAPSHOT_CORRUPT, entry=position, reason=str(e)) from e
        if signature.name in signatures:
            raise SnapshotLoadError(
                ErrorCodes.SNAPSHOT_CORRUPT,
                entry=position,
                reason=f"duplicate action word {signature.name!r}",
            )
        signatures[signature.name] = signature

    return signatures


def read_snapshot(path: Path) -> dict[str, Signature]:
    """
    snapshot 파일 로드.

    Raises:
        SnapshotLoadError: SNAPSHOT_MISSING / SNAPSHOT_CORRUPT
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise SnapshotLoadError(ErrorCodes.SNAPSHOT_MISSING, path=str(path)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise SnapshotLoadError(ErrorCodes.SNAPSHOT_CORRUPT, path=str(path), reason=str(e)) from e

    return load_snapshot(text)


def write_snapshot(path: Path, signatures: Mapping[str, Signature]) -> Path:
    """
    원자적 snapshot 쓰기 (temp → rename).

    직렬화 검증이 끝난 텍스트만 기록하므로 실패 시 기존 파일은 그대로 남는다.
    """
    text = dump_snapshot(signatures)

    dir_path = path.parent
    dir_path.mkdir(parents=True, exist_ok=True)

    temp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=dir_path,
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        ) as f:
            temp_path = Path(f.name)
            f.write(text)

        os.replace(temp_path, path)

    except Exception:
        if temp_path and temp_path.exists():
            temp_path.unlink()
        raise

    logger.info(f"Wrote {len(signatures)} action word signature(s) to {path}")
    return path
