import io
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from mvnpublisher.src.context import Console
from mvnpublisher.src.discovery import derive_artifact_name, discover_archives


class TestDeriveArtifactName(unittest.TestCase):
    def test_strips_version_and_extension(self):
        self.assertEqual(derive_artifact_name("foo-1.2.3.jar"), "foo")
        self.assertEqual(derive_artifact_name("baz-10.0.jar"), "baz")

    def test_without_version_only_strips_extension(self):
        self.assertEqual(derive_artifact_name("bar.jar"), "bar")

    def test_single_number_is_not_a_version(self):
        self.assertEqual(derive_artifact_name("java-8.jar"), "java-8")

    def test_version_followed_by_qualifier(self):
        # Only the leftmost token goes; the qualifier stays in the name.
        self.assertEqual(derive_artifact_name("archive-2.0.1-beta.jar"), "archive-beta")

    def test_only_first_version_is_removed(self):
        self.assertEqual(derive_artifact_name("lib-1.0-core-2.0.jar"), "lib-core-2.0")

    def test_version_must_follow_a_word(self):
        self.assertEqual(derive_artifact_name("-1.2.jar"), "-1.2")


class TestDiscoverArchives(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)

    def tearDown(self):
        self.temp_dir.cleanup()

    def _touch(self, *names):
        for name in names:
            (self.root / name).write_bytes(b"PK")

    def test_finds_jars_and_derives_names(self):
        self._touch("foo-1.2.3.jar", "bar.jar", "baz-10.0.jar", "notes.txt")

        found = discover_archives(self.root)

        self.assertEqual(
            {path.name: name for path, name in found.items()},
            {"foo-1.2.3.jar": "foo", "bar.jar": "bar", "baz-10.0.jar": "baz"},
        )
        # Files on disk keep their names.
        self.assertTrue((self.root / "foo-1.2.3.jar").exists())
        self.assertTrue((self.root / "baz-10.0.jar").exists())

    def test_is_not_recursive(self):
        nested = self.root / "com" / "example"
        nested.mkdir(parents=True)
        (nested / "deep-1.0.jar").write_bytes(b"PK")
        self._touch("top.jar")

        found = discover_archives(self.root)

        self.assertEqual(list(found.values()), ["top"])

    def test_empty_directory_returns_empty_mapping(self):
        with patch("sys.stdout", new=io.StringIO()) as fake_out:
            found = discover_archives(self.root, console=Console("info"))

        self.assertEqual(found, {})
        self.assertIn("doesn't have valid files", fake_out.getvalue())

    def test_excluded_file_is_skipped(self):
        self._touch("publisher-1.0.jar", "lib-2.0.jar")

        found = discover_archives(self.root, exclude=[self.root / "publisher-1.0.jar"])

        self.assertEqual(list(found.values()), ["lib"])

    def test_not_a_directory_raises(self):
        self._touch("file.jar")
        with self.assertRaises(ValueError):
            discover_archives(self.root / "file.jar")


if __name__ == "__main__":
    unittest.main()
