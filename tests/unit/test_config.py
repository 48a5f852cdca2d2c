"""
test_config.py - 설정 로드 테스트

DoD:
- default.yaml 의 모든 언어 그룹이 유효한 OutputGroupConfig
- 알 수 없는 언어/category/naming/rename_match → ConfigError
"""

from pathlib import Path

import pytest

from scenario_publisher.config import load_config, parse_output_groups, rename_predicate
from scenario_publisher.domain.errors import ConfigError, ErrorCodes
from scenario_publisher.render.context import OutputCategory
from scenario_publisher.render.naming import NamingConvention
from scenario_publisher.signature.differ import same_shape_and_body, same_uid


class TestLoadConfig:
    def test_default_config(self, default_config_path: Path):
        config = load_config(default_config_path)

        assert config["diff"]["rename_match"] == "shape_and_body"
        assert set(config["languages"]) >= {"python", "javascript", "gherkin"}

    def test_default_path(self, default_config_path: Path):
        """인자 없이 호출하면 프로젝트 루트 default.yaml."""
        assert load_config() == load_config(default_config_path)

    def test_missing_file(self, tmp_path: Path):
        assert load_config(tmp_path / "none.yaml") == {}

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(path) == {}


class TestParseOutputGroups:
    """parse_output_groups 테스트."""

    @pytest.mark.parametrize("language", ["python", "javascript", "gherkin"])
    def test_default_languages_valid(self, default_config_path: Path, language: str):
        groups = parse_output_groups(load_config(default_config_path), language)

        assert {g.category for g in groups} == set(OutputCategory)

    def test_python_groups(self, default_config_path: Path):
        test_code, stubs = parse_output_groups(load_config(default_config_path), "python")

        assert test_code.named_filename == "test_{name}.py"
        assert test_code.context == {"framework": "pytest"}
        assert stubs.filename == "actionwords.py"
        assert stubs.naming is NamingConvention.SNAKE

    def test_language_override(self, default_config_path: Path):
        """gherkin step definitions 는 python 으로 렌더."""
        groups = parse_output_groups(
            load_config(default_config_path), "gherkin", OutputCategory.ACTIONWORDS_STUBS,
        )

        assert len(groups) == 1
        assert groups[0].language == "python"
        assert groups[0].output_id() == "features/steps/step_definitions.py"

    def test_category_filter_by_string(self, default_config_path: Path):
        groups = parse_output_groups(load_config(default_config_path), "javascript", "test_code")

        assert [g.filename for g in groups] == ["project_test.js"]

    def test_list_of_groups(self):
        config = {"languages": {"python": {"test_code": [
            {"filename": "all_tests.py"},
            {"named_filename": "test_{name}.py", "naming": "pascal"},
        ]}}}

        groups = parse_output_groups(config, "python")

        assert [g.per_node for g in groups] == [False, True]
        assert groups[1].naming is NamingConvention.PASCAL

    @pytest.mark.parametrize(
        "config",
        [
            {"languages": {}},
            {"languages": {"python": {"documentation": {"filename": "a"}}}},
            {"languages": {"python": {"test_code": "a.py"}}},
            {"languages": {"python": {"test_code": {"filename": "a.py", "naming": "screaming"}}}},
            {"languages": {"python": {"test_code": {"naming": "snake"}}}},
        ],
    )
    def test_invalid(self, config: dict):
        with pytest.raises(ConfigError) as exc_info:
            parse_output_groups(config, "python")

        assert exc_info.value.code == ErrorCodes.INVALID_OUTPUT_CONFIG


class TestRenamePredicate:
    def test_default(self):
        assert rename_predicate({}) is same_shape_and_body

    def test_uid(self):
        assert rename_predicate({"diff": {"rename_match": "uid"}}) is same_uid

    def test_unknown(self):
        with pytest.raises(ConfigError):
            rename_predicate({"diff": {"rename_match": "fuzzy"}})
