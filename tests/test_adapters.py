"""
Tests for filesystem, command, and publishing adapters.
"""

from pathlib import Path

import pytest

from fullstack.adapters.command import CommandError, command_environment, run_command
from fullstack.adapters.filesystem import copy_tree, delete_path
from fullstack.adapters.publishing import (
    PublishingError,
    add_publication_repository,
    artifact_path,
    coordinates_path,
    publish_artifact,
)

# ── Filesystem ───────────────────────────────────────────────────────


class TestCopyTree:
    def test_copies_contents(self, tmp_path: Path):
        source = tmp_path / "src"
        (source / "a" / "b").mkdir(parents=True)
        (source / "a" / "b" / "file.txt").write_text("hello")
        (source / "empty").mkdir()

        count = copy_tree(source, tmp_path / "dst")

        assert count == 1
        assert (tmp_path / "dst" / "a" / "b" / "file.txt").read_text() == "hello"
        assert (tmp_path / "dst" / "empty").is_dir()

    def test_follows_symlinked_directories(self, tmp_path: Path):
        real = tmp_path / "real" / "com" / "x"
        real.mkdir(parents=True)
        (real / "a.jar").write_text("jar")
        source = tmp_path / "src"
        source.mkdir()
        (source / "com").symlink_to(tmp_path / "real" / "com", target_is_directory=True)

        count = copy_tree(source, tmp_path / "dst")

        assert count == 1
        copied = tmp_path / "dst" / "com" / "x" / "a.jar"
        assert copied.read_text() == "jar"
        assert not (tmp_path / "dst" / "com").is_symlink()

    def test_overwrites_into_existing_target(self, tmp_path: Path):
        source = tmp_path / "src"
        source.mkdir()
        (source / "same.txt").write_text("new")
        target = tmp_path / "dst"
        target.mkdir()
        (target / "same.txt").write_text("old")
        (target / "other.txt").write_text("kept")

        copy_tree(source, target)

        assert (target / "same.txt").read_text() == "new"
        assert (target / "other.txt").read_text() == "kept"

    def test_target_blocked_by_file_raises(self, tmp_path: Path):
        source = tmp_path / "src"
        source.mkdir()
        (source / "f").write_text("x")
        blocked = tmp_path / "dst"
        blocked.write_text("not a directory")

        with pytest.raises(OSError):
            copy_tree(source, blocked)


class TestDeletePath:
    def test_deletes_directory(self, tmp_path: Path):
        target = tmp_path / "build"
        (target / "libs").mkdir(parents=True)
        assert delete_path(target)
        assert not target.exists()

    def test_deletes_file(self, tmp_path: Path):
        target = tmp_path / "file"
        target.write_text("x")
        assert delete_path(target)
        assert not target.exists()

    def test_missing_is_not_error(self, tmp_path: Path):
        assert not delete_path(tmp_path / "nothing")


# ── Command ──────────────────────────────────────────────────────────


class TestRunCommand:
    def test_environment(self, make_unit):
        unit = make_unit("app", group="com.example", version="1.0.0")
        env = command_environment(unit)
        assert env["FULLSTACK_UNIT"] == "app"
        assert env["FULLSTACK_GROUP"] == "com.example"
        assert env["FULLSTACK_VERSION"] == "1.0.0"

    def test_runs_in_unit_root(self, make_unit):
        unit = make_unit("app", version="2.0.0")
        output = run_command(unit, 'echo "$FULLSTACK_UNIT-$FULLSTACK_VERSION" > out.txt && echo done')
        assert output == "done"
        assert (unit.root_path / "out.txt").read_text().strip() == "app-2.0.0"

    def test_failure_raises(self, make_unit):
        unit = make_unit("app")
        with pytest.raises(CommandError) as exc:
            run_command(unit, "echo nope >&2; exit 3")
        assert exc.value.return_code == 3
        assert "nope" in str(exc.value)


# ── Publishing ───────────────────────────────────────────────────────


class TestPublishing:
    def test_add_repository_is_idempotent_per_name(self, make_unit, tmp_path: Path):
        unit = make_unit("model", publishable=True)
        first = add_publication_repository(unit, "mavenRoot", tmp_path / "one")
        again = add_publication_repository(unit, "mavenRoot", tmp_path / "two")
        assert again is first
        assert len(unit.publish.repositories) == 1

    def test_add_repository_requires_capability(self, make_unit, tmp_path: Path):
        with pytest.raises(PublishingError):
            add_publication_repository(make_unit("plain"), "mavenRoot", tmp_path)

    def test_coordinates(self, make_unit):
        unit = make_unit("model", publishable=True, group="com.example.app", version="1.2.3")
        assert coordinates_path(unit) == Path("com/example/app/model/1.2.3")
        assert artifact_path(unit) == unit.root_path / "build" / "libs" / "model-1.2.3.jar"

    def test_publish_copies_artifact_and_pom(self, make_unit, tmp_path: Path):
        unit = make_unit("model", publishable=True, group="com.example", version="1.2.3")
        artifact = artifact_path(unit)
        artifact.parent.mkdir(parents=True)
        artifact.write_bytes(b"jar")
        add_publication_repository(unit, "mavenRoot", tmp_path / "repo")

        published = publish_artifact(unit)

        directory = tmp_path / "repo" / "com" / "example" / "model" / "1.2.3"
        assert published == [directory / "model-1.2.3.jar"]
        assert (directory / "model-1.2.3.jar").read_bytes() == b"jar"
        assert "<artifactId>model</artifactId>" in (directory / "model-1.2.3.pom").read_text()

    def test_publish_without_artifact_fails(self, make_unit, tmp_path: Path):
        unit = make_unit("model", publishable=True, version="1.0.0")
        add_publication_repository(unit, "mavenRoot", tmp_path / "repo")
        with pytest.raises(PublishingError, match="Artifact not found"):
            publish_artifact(unit)
