import json

import pytest

from npmmenu.ecosystems.npm.reader import (
    find_manifest,
    flatten_field,
    get_field,
    load_project_manifest,
    read_manifest,
    read_manifest_data,
)
from npmmenu.models import DependencyEntry, DependencyGroup, ScriptEntry
from npmmenu.utils.exceptions import ManifestNotFoundError, ManifestParseError, NpmMenuError


def write_manifest(directory, data):
    path = directory / "package.json"
    path.write_text(json.dumps(data))
    return path


class TestFindManifest:
    """Test manifest discovery through ancestor directories."""

    def test_finds_manifest_in_start_directory(self, tmp_path):
        path = write_manifest(tmp_path, {"name": "demo"})
        assert find_manifest(tmp_path) == path.resolve()

    def test_finds_manifest_in_ancestor(self, tmp_path):
        path = write_manifest(tmp_path, {"name": "demo"})
        nested = tmp_path / "src" / "components" / "button"
        nested.mkdir(parents=True)
        assert find_manifest(nested) == path.resolve()

    def test_nearest_manifest_wins(self, tmp_path):
        write_manifest(tmp_path, {"name": "outer"})
        inner_dir = tmp_path / "packages" / "inner"
        inner_dir.mkdir(parents=True)
        inner = write_manifest(inner_dir, {"name": "inner"})
        assert find_manifest(inner_dir / ".") == inner.resolve()

    def test_missing_manifest_raises(self, tmp_path):
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        with pytest.raises(ManifestNotFoundError) as exc_info:
            find_manifest(nested, manifest_name="no-such-manifest.json")
        assert "no-such-manifest.json" in str(exc_info.value)
        assert isinstance(exc_info.value, NpmMenuError)

    def test_directory_with_manifest_name_is_ignored(self, tmp_path):
        (tmp_path / "child").mkdir()
        (tmp_path / "child" / "odd-manifest.json").mkdir()
        path = tmp_path / "odd-manifest.json"
        path.write_text("{}")
        assert find_manifest(tmp_path / "child", manifest_name="odd-manifest.json") == path.resolve()

    def test_defaults_to_current_directory(self, tmp_path, monkeypatch):
        path = write_manifest(tmp_path, {"name": "demo"})
        monkeypatch.chdir(tmp_path)
        assert find_manifest() == path.resolve()


class TestReadManifest:
    """Test manifest parsing into the typed structure."""

    def test_dependency_entries_tag_non_regular_groups(self, tmp_path):
        path = write_manifest(tmp_path, {
            "dependencies": {"foo": "1.0.0"},
            "devDependencies": {"bar": "2.0.0"},
        })
        entries = read_manifest(path).dependency_entries()
        assert entries == [
            DependencyEntry(label="foo", name="foo", version="1.0.0", group=DependencyGroup.REGULAR),
            DependencyEntry(label="bar (dev)", name="bar", version="2.0.0", group=DependencyGroup.DEV),
        ]

    def test_same_name_in_two_groups_gets_distinct_labels(self, tmp_path):
        path = write_manifest(tmp_path, {
            "dependencies": {"react": "^18.0.0"},
            "peerDependencies": {"react": ">=17"},
            "optionalDependencies": {"fsevents": "^2.3.0"},
        })
        labels = [entry.label for entry in read_manifest(path).dependency_entries()]
        assert labels == ["react", "react (peer)", "fsevents (optional)"]

    def test_bundled_dependencies_array(self, tmp_path):
        path = write_manifest(tmp_path, {"bundledDependencies": ["left-pad", "right-pad"]})
        entries = read_manifest(path).dependency_entries()
        assert [(e.label, e.name, e.version) for e in entries] == [
            ("left-pad (bundled)", "left-pad", ""),
            ("right-pad (bundled)", "right-pad", ""),
        ]

    def test_legacy_bundle_dependencies_spelling(self, tmp_path):
        path = write_manifest(tmp_path, {"bundleDependencies": ["left-pad"]})
        assert read_manifest(path).bundled_dependencies == {"left-pad": ""}

    def test_scripts_and_metadata(self, tmp_path):
        path = write_manifest(tmp_path, {
            "name": "demo",
            "version": "1.2.3",
            "scripts": {"build": "tsc", "test": "jest"},
            "license": "MIT",
        })
        manifest = read_manifest(path)
        assert manifest.name == "demo"
        assert manifest.version == "1.2.3"
        assert manifest.script_entries() == [ScriptEntry("build", "tsc"), ScriptEntry("test", "jest")]
        assert manifest.extra == {"license": "MIT"}
        assert manifest.project_dir == tmp_path

    def test_display_name_falls_back_to_directory(self, tmp_path):
        project = tmp_path / "unnamed-project"
        project.mkdir()
        path = write_manifest(project, {})
        assert read_manifest(path).display_name == "unnamed-project"

    def test_invalid_json_raises_parse_error(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text('{"name": "demo",')
        with pytest.raises(ManifestParseError) as exc_info:
            read_manifest(path)
        assert exc_info.value.path == path
        assert exc_info.value.original_exception is not None

    def test_non_object_raises_parse_error(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(ManifestParseError):
            read_manifest_data(path)

    def test_reads_are_fresh_and_stable(self, tmp_path):
        path = write_manifest(tmp_path, {"scripts": {"start": "node ."}})
        assert read_manifest(path) == read_manifest(path)

        write_manifest(tmp_path, {"scripts": {"start": "node server.js"}})
        assert read_manifest(path).scripts == {"start": "node server.js"}

    def test_load_project_manifest(self, tmp_path):
        write_manifest(tmp_path, {"name": "demo"})
        nested = tmp_path / "lib"
        nested.mkdir()
        assert load_project_manifest(nested).name == "demo"


class TestFieldHelpers:
    """Test generic field extraction."""

    def test_get_field(self):
        data = {"name": "demo"}
        assert get_field(data, "name") == "demo"
        assert get_field(data, "scripts") is None

    def test_flatten_mapping_with_tag(self):
        assert flatten_field({"bar": "2.0.0", "baz": "3.0.0"}, tag="dev") == [
            ("bar (dev)", "bar"),
            ("baz (dev)", "baz"),
        ]

    def test_flatten_mapping_without_tag(self):
        assert flatten_field({"foo": "1.0.0"}) == [("foo", "foo")]

    def test_flatten_scalar_is_empty(self):
        assert flatten_field("1.0.0") == []
        assert flatten_field(None) == []
