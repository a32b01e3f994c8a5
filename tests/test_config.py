"""
Tests for configuration loading — fullstack.yml trees.
"""

from pathlib import Path

import pytest

from fullstack.core.config.loader import (
    ConfigError,
    find_unit_file,
    load_hierarchy,
    read_unit_config,
)
from fullstack.core.models import UNSPECIFIED_VERSION
from fullstack.core.use_cases.config_check import check_config


@pytest.fixture
def domain_tree(tmp_path: Path, write_unit) -> Path:
    """Domain → (platform folder) → Implementation → publishable sub-project."""
    domain = tmp_path / "com.example"
    write_unit(
        domain,
        """\
        profile: domain
        version: 1.2.3
        children:
          - platform/com.example.app
        """,
    )
    impl = domain / "platform" / "com.example.app"
    write_unit(
        impl,
        """\
        profile: implementation
        children: [com.example.app.model]
        """,
    )
    write_unit(
        impl / "com.example.app.model",
        """\
        publish: true
        capabilities:
          build: "true"
        """,
    )
    return domain


class TestReadUnitConfig:
    def test_numeric_version_becomes_string(self, tmp_path: Path, write_unit):
        path = write_unit(tmp_path / "a", "version: 1.2\n")
        assert read_unit_config(path).version == "1.2"

    def test_empty_file(self, tmp_path: Path, write_unit):
        config = read_unit_config(write_unit(tmp_path / "a", ""))
        assert config.version == UNSPECIFIED_VERSION
        assert config.children == []

    def test_publish_mapping(self, tmp_path: Path, write_unit):
        path = write_unit(tmp_path / "a", "publish:\n  artifact: zip\n")
        assert read_unit_config(path).publish.artifact == "zip"

    def test_unknown_key_rejected(self, tmp_path: Path, write_unit):
        path = write_unit(tmp_path / "a", "colour: blue\n")
        with pytest.raises(ConfigError, match="Invalid unit configuration"):
            read_unit_config(path)

    def test_bad_profile_rejected(self, tmp_path: Path, write_unit):
        path = write_unit(tmp_path / "a", "profile: platform\n")
        with pytest.raises(ConfigError):
            read_unit_config(path)

    def test_invalid_yaml(self, tmp_path: Path, write_unit):
        path = write_unit(tmp_path / "a", "children: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            read_unit_config(path)

    def test_non_mapping(self, tmp_path: Path, write_unit):
        path = write_unit(tmp_path / "a", "- a\n- b\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            read_unit_config(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            read_unit_config(tmp_path / "fullstack.yml")


class TestLoadHierarchy:
    def test_loads_tree(self, domain_tree: Path):
        root = load_hierarchy(domain_tree)
        assert root.identity == "com.example"
        assert root.profile == "domain"
        assert root.version == "1.2.3"

        impl = root.children[0]
        assert impl.identity == "com.example.app"
        assert impl.root_path == domain_tree / "platform" / "com.example.app"

        model = impl.children[0]
        assert model.is_publishable
        assert model.capabilities == {"build": "true"}
        assert model.version == UNSPECIFIED_VERSION

    def test_accepts_file_path(self, domain_tree: Path):
        root = load_hierarchy(domain_tree / "fullstack.yml")
        assert root.identity == "com.example"

    def test_name_overrides_directory(self, tmp_path: Path, write_unit):
        write_unit(tmp_path / "dir", "name: custom\n")
        assert load_hierarchy(tmp_path / "dir").identity == "custom"

    def test_missing_child_directory(self, tmp_path: Path, write_unit):
        write_unit(tmp_path / "root", "children: [ghost]\n")
        with pytest.raises(ConfigError, match="not found"):
            load_hierarchy(tmp_path / "root")

    def test_child_without_file(self, tmp_path: Path, write_unit):
        write_unit(tmp_path / "root", "children: [child]\n")
        (tmp_path / "root" / "child").mkdir()
        with pytest.raises(ConfigError, match="Config file not found"):
            load_hierarchy(tmp_path / "root")

    def test_duplicate_children(self, tmp_path: Path, write_unit):
        write_unit(tmp_path / "root", "children: [a, b]\n")
        write_unit(tmp_path / "root" / "a", "name: same\n")
        write_unit(tmp_path / "root" / "b", "name: same\n")
        with pytest.raises(ConfigError, match="Duplicate child"):
            load_hierarchy(tmp_path / "root")

    def test_self_inclusion(self, tmp_path: Path, write_unit):
        write_unit(tmp_path / "root", "children: [.]\n")
        with pytest.raises(ConfigError, match="includes itself"):
            load_hierarchy(tmp_path / "root")

    def test_separator_in_name(self, tmp_path: Path, write_unit):
        write_unit(tmp_path / "root", "name: 'a:b'\n")
        with pytest.raises(ConfigError, match="Invalid unit name"):
            load_hierarchy(tmp_path / "root")

    def test_no_file_in_cwd(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert find_unit_file() is None
        with pytest.raises(ConfigError, match="No fullstack.yml"):
            load_hierarchy()


class TestCheckConfig:
    def test_valid(self, domain_tree: Path):
        result = check_config(domain_tree / "fullstack.yml")
        assert result.valid
        assert result.warnings == []
        assert result.to_dict()["unit_count"] == 3

    def test_invalid(self, tmp_path: Path, write_unit):
        path = write_unit(tmp_path / "root", "children: [ghost]\n")
        result = check_config(path)
        assert not result.valid
        assert result.errors

    def test_warnings(self, tmp_path: Path, write_unit):
        path = write_unit(
            tmp_path / "root",
            """\
            profile: implementation
            children: [plain, loose]
            """,
        )
        write_unit(tmp_path / "root" / "plain", "children: [deep]\n")
        write_unit(tmp_path / "root" / "plain" / "deep", "")
        write_unit(tmp_path / "root" / "loose", "publish: true\n")
        result = check_config(path)
        assert result.valid
        assert any("'plain'" in w and "publish" in w for w in result.warnings)
        assert any("'deep'" in w and "publish" in w for w in result.warnings)
        # Nested sub-projects are aggregated by the enclosing implementation
        assert not any("children but no profile" in w for w in result.warnings)

    def test_unaggregated_children(self, tmp_path: Path, write_unit):
        path = write_unit(tmp_path / "plain", "children: [deep]\n")
        write_unit(tmp_path / "plain" / "deep", "")
        result = check_config(path)
        assert any("children but no profile" in w for w in result.warnings)

    def test_publishable_outside_implementation(self, tmp_path: Path, write_unit):
        path = write_unit(tmp_path / "solo", "publish: true\n")
        result = check_config(path)
        assert any("not inside an implementation" in w for w in result.warnings)
