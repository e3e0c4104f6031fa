# tests/test_feed_writer.py
"""
Tests for feedbuilder.feed.writer module.
"""

import os
import xml.etree.ElementTree as ET

import pytest

from feedbuilder.exceptions import (
    InvalidFeedLocationError,
    ManifestWriteError,
    PathResolutionError,
)
from feedbuilder.feed.catalog import FileCatalogEntry
from feedbuilder.feed.conditions import Condition
from feedbuilder.feed.writer import ManifestWriter, write_manifest


def make_entry(relative_path="a.exe", **overrides) -> FileCatalogEntry:
    values = dict(
        relative_path=relative_path,
        absolute_path=f"/src/{relative_path}",
        size_bytes=1024,
        last_modified=132444736000000000,
    )
    values.update(overrides)
    return FileCatalogEntry(**values)


EXISTS = Condition("FileExistsCondition", {"type": "or"})
SIZE_NOT = Condition("FileSizeCondition", {"type": "not", "what": "is", "size": "1024"})


class TestFeedLocation:
    """The output path must be set."""

    @pytest.mark.parametrize("path", [None, "", "   "])
    def test_unset_output_path(self, path):
        with pytest.raises(InvalidFeedLocationError):
            ManifestWriter(path)

    def test_relative_output_path_is_absolute(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        writer = ManifestWriter("publish/feed.xml")

        assert writer.output_path == tmp_path / "publish" / "feed.xml"
        assert writer.output_dir == tmp_path / "publish"


class TestSerialization:
    """Document shape and encoding."""

    def test_exact_output(self, tmp_path):
        writer = ManifestWriter(tmp_path / "feed.xml", "http://host/app/")
        writer.add_task(make_entry(), [EXISTS, SIZE_NOT])

        expected = (
            '<?xml version="1.0" encoding="utf-8"?>\n'
            '<Feed BaseUrl="http://host/app/">\n'
            "  <Tasks>\n"
            '    <FileUpdateTask localPath="a.exe" lastModified="132444736000000000" fileSize="1024">\n'
            "      <Conditions>\n"
            '        <FileExistsCondition type="or" />\n'
            '        <FileSizeCondition type="not" what="is" size="1024" />\n'
            "      </Conditions>\n"
            "    </FileUpdateTask>\n"
            "  </Tasks>\n"
            "</Feed>\n"
        )
        assert writer.to_bytes().decode("utf-8") == expected

    def test_base_url_omitted_when_empty(self, tmp_path):
        writer = ManifestWriter(tmp_path / "feed.xml", "")

        root = ET.fromstring(writer.to_bytes())

        assert root.tag == "Feed"
        assert "BaseUrl" not in root.attrib
        assert root.find("Tasks") is not None

    def test_version_attribute_only_when_known(self, tmp_path):
        writer = ManifestWriter(tmp_path / "feed.xml")
        writer.add_task(make_entry("a.exe", file_version="1.2.0.0"), [EXISTS])
        writer.add_task(make_entry("b.txt"), [EXISTS])

        tasks = ET.fromstring(writer.to_bytes()).findall("./Tasks/FileUpdateTask")

        assert tasks[0].get("version") == "1.2.0.0"
        assert "version" not in tasks[1].attrib

    def test_round_trip_preserves_values(self, tmp_path):
        checksum = "0123456789abcdef" * 4
        entry = make_entry(size_bytes=2**40 + 7, last_modified=133500000001234567)
        writer = ManifestWriter(tmp_path / "feed.xml", "http://h/?a=1&b=2")
        writer.add_task(
            entry,
            [
                EXISTS,
                Condition(
                    "FileChecksumCondition",
                    {"type": "not", "checksumType": "sha256", "checksum": checksum},
                ),
            ],
        )

        root = ET.fromstring(writer.to_bytes())
        task = root.find("./Tasks/FileUpdateTask")

        assert root.get("BaseUrl") == "http://h/?a=1&b=2"
        assert int(task.get("lastModified")) == 133500000001234567
        assert int(task.get("fileSize")) == 2**40 + 7
        assert task.find("./Conditions/FileChecksumCondition").get("checksum") == checksum

    def test_tasks_keep_insertion_order(self, tmp_path):
        writer = ManifestWriter(tmp_path / "feed.xml")
        for name in ["z.dll", "a.dll", "m.dll"]:
            writer.add_task(make_entry(name), [EXISTS])

        tasks = ET.fromstring(writer.to_bytes()).findall("./Tasks/FileUpdateTask")

        assert [t.get("localPath") for t in tasks] == ["z.dll", "a.dll", "m.dll"]
        assert writer.task_count == 3

    def test_serialization_is_repeatable(self, tmp_path):
        writer = ManifestWriter(tmp_path / "feed.xml")
        writer.add_task(make_entry(), [EXISTS, SIZE_NOT])

        assert writer.to_bytes() == writer.to_bytes()


class TestResolveDestination:
    """Staging destinations."""

    def test_joins_output_dir(self, tmp_path):
        writer = ManifestWriter(tmp_path / "out" / "feed.xml")

        resolution = writer.resolve_destination(make_entry(os.path.join("sub", "a.dll")))

        assert resolution.ok
        assert resolution.destination == tmp_path / "out" / "sub" / "a.dll"
        assert resolution.error is None

    @pytest.mark.parametrize(
        "relative_path",
        ["", "   ", os.path.join("..", "escape.dll"), ".", os.path.abspath("abs.dll")],
    )
    def test_unresolvable_paths(self, tmp_path, relative_path):
        writer = ManifestWriter(tmp_path / "out" / "feed.xml")

        resolution = writer.resolve_destination(make_entry(relative_path))

        assert not resolution.ok
        assert isinstance(resolution.error, PathResolutionError)
        assert "could not be pathed" in str(resolution.error)


class TestSave:
    """Writing to disk."""

    def test_creates_parent_and_overwrites(self, tmp_path, fast_ops):
        target = tmp_path / "deep" / "nested" / "feed.xml"
        target.parent.mkdir(parents=True)
        target.write_text("stale", encoding="utf-8")

        writer = ManifestWriter(target, file_ops=fast_ops)
        writer.add_task(make_entry(), [EXISTS])
        path = writer.save()

        assert path == target
        assert target.read_bytes() == writer.to_bytes()

    def test_missing_parent_is_created(self, tmp_path, fast_ops):
        target = tmp_path / "new" / "feed.xml"

        ManifestWriter(target, file_ops=fast_ops).save()

        assert target.is_file()

    def test_parent_cannot_be_created(self, tmp_path, fast_ops, sleeps):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a folder", encoding="utf-8")

        writer = ManifestWriter(blocker / "feed.xml", file_ops=fast_ops)

        with pytest.raises(ManifestWriteError):
            writer.save()
        assert sleeps == [0.2, 0.2]

    def test_write_failure(self, tmp_path, fast_ops):
        target = tmp_path / "feed.xml"
        target.mkdir()

        with pytest.raises(ManifestWriteError):
            ManifestWriter(target, file_ops=fast_ops).save()


def test_write_manifest_one_shot(tmp_path):
    entries = [make_entry("a.exe"), make_entry("b.dll")]
    conditions = {"a.exe": [EXISTS, SIZE_NOT]}

    path = write_manifest(entries, conditions, "http://host/", tmp_path / "feed.xml")

    tasks = ET.parse(path).getroot().findall("./Tasks/FileUpdateTask")
    assert [t.get("localPath") for t in tasks] == ["a.exe", "b.dll"]
    assert len(tasks[0].find("Conditions")) == 2
    assert len(tasks[1].find("Conditions")) == 0
