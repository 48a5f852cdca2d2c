"""
설정 로드: default.yaml → 출력 그룹 / diff 옵션.

구조:
    diff:
      rename_match: shape_and_body   # 또는 uid
    languages:
      <language>:
        <category>: {filename | named_filename, naming, output_directory, context}
        # category 값에 리스트를 주면 그룹 여러 개
"""

from pathlib import Path
from typing import Any

import yaml

from scenario_publisher.domain.errors import ConfigError, ErrorCodes
from scenario_publisher.render.context import OutputCategory, OutputGroupConfig
from scenario_publisher.render.naming import NamingConvention
from scenario_publisher.signature.differ import RENAME_PREDICATES, RenamePredicate

DEFAULT_RENAME_MATCH = "shape_and_body"


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드 (없으면 빈 설정)."""
    if config_path is None:
        # 프로젝트 루트의 default.yaml
        config_path = Path(__file__).parent.parent.parent / "default.yaml"

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] = yaml.safe_load(f) or {}
        return data


def parse_output_groups(
    config: dict,
    language: str,
    category: OutputCategory | str | None = None,
) -> list[OutputGroupConfig]:
    """
    language 의 출력 그룹 목록 (설정 파일 순서).

    Args:
        config: load_config() 결과
        language: 대상 언어 키 (예: "python")
        category: 지정 시 해당 category 만

    Raises:
        ConfigError: INVALID_OUTPUT_CONFIG
    """
    languages = config.get("languages") or {}
    if language not in languages:
        raise ConfigError(
            ErrorCodes.INVALID_OUTPUT_CONFIG,
            language=language,
            reason="unknown language",
            available=sorted(languages),
        )

    wanted = None if category is None else OutputCategory(category)
    groups: list[OutputGroupConfig] = []

    for category_key, entries in (languages[language] or {}).items():
        group_category = _parse_category(language, category_key)
        if wanted is not None and group_category is not wanted:
            continue
        for entry in entries if isinstance(entries, list) else [entries]:
            groups.append(_parse_group(language, group_category, entry))

    return groups


def rename_predicate(config: dict) -> RenamePredicate:
    """diff.rename_match 설정 → rename 판정 술어."""
    name = (config.get("diff") or {}).get("rename_match", DEFAULT_RENAME_MATCH)
    if name not in RENAME_PREDICATES:
        raise ConfigError(
            ErrorCodes.INVALID_OUTPUT_CONFIG,
            rename_match=name,
            reason="unknown rename_match",
            available=sorted(RENAME_PREDICATES),
        )
    return RENAME_PREDICATES[name]


def _parse_category(language: str, key: str) -> OutputCategory:
    try:
        return OutputCategory(key)
    except ValueError as e:
        raise ConfigError(
            ErrorCodes.INVALID_OUTPUT_CONFIG,
            language=language,
            category=key,
            reason="unknown category",
        ) from e


def _parse_group(language: str, category: OutputCategory, entry: Any) -> OutputGroupConfig:
    if not isinstance(entry, dict):
        raise ConfigError(
            ErrorCodes.INVALID_OUTPUT_CONFIG,
            language=language,
            category=category.value,
            reason="group must be a mapping",
        )

    naming = entry.get("naming", NamingConvention.SNAKE.value)
    try:
        convention = NamingConvention(naming)
    except ValueError as e:
        raise ConfigError(
            ErrorCodes.INVALID_OUTPUT_CONFIG,
            language=language,
            naming=naming,
            reason="unknown naming convention",
        ) from e

    return OutputGroupConfig(
        category=category,
        language=entry.get("language", language),
        filename=entry.get("filename"),
        named_filename=entry.get("named_filename"),
        naming=convention,
        output_directory=entry.get("output_directory", ""),
        context=dict(entry.get("context") or {}),
    )
