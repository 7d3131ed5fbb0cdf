import tempfile
import textwrap
import unittest
from pathlib import Path

from core.config_loader import load_config_file, normalize_string_list, select_section


class TestLoadConfigFile(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_toml(self):
        path = self.root / "publisher.toml"
        path.write_text(textwrap.dedent(
            """
            groupId = "com.example"

            [publisher]
            remote = "origin"
            """
        ), encoding="utf-8")

        data = load_config_file(path)

        self.assertEqual(data["groupId"], "com.example")
        self.assertEqual(data["publisher"]["remote"], "origin")

    def test_json(self):
        path = self.root / "publisher.json"
        path.write_text('{"branch": "main"}', encoding="utf-8")
        self.assertEqual(load_config_file(path), {"branch": "main"})

    def test_empty_yaml_is_empty_mapping(self):
        path = self.root / "publisher.yaml"
        path.write_text("", encoding="utf-8")
        self.assertEqual(load_config_file(path), {})

    def test_unsupported_extension(self):
        path = self.root / "publisher.ini"
        path.write_text("[x]", encoding="utf-8")
        with self.assertRaises(ValueError):
            load_config_file(path)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config_file(self.root / "missing.toml")

    def test_root_must_be_mapping(self):
        path = self.root / "publisher.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with self.assertRaises(TypeError):
            load_config_file(path)


class TestSelectSection(unittest.TestCase):
    def test_section_overrides_root_keys(self):
        data = {"groupId": "root", "branch": "main", "publisher": {"groupId": "nested"}}
        self.assertEqual(select_section(data, "publisher"), {"groupId": "nested", "branch": "main"})

    def test_other_tables_are_ignored(self):
        data = {"version": "1.0", "other": {"version": "2.0"}}
        self.assertEqual(select_section(data, "publisher"), {"version": "1.0"})

    def test_section_must_be_mapping(self):
        with self.assertRaises(TypeError):
            select_section({"publisher": "oops"}, "publisher")


class TestNormalizeStringList(unittest.TestCase):
    def test_values(self):
        self.assertEqual(normalize_string_list(None), [])
        self.assertEqual(normalize_string_list("  a.jar "), ["a.jar"])
        self.assertEqual(normalize_string_list(["a.jar", " ", "b.jar"]), ["a.jar", "b.jar"])

    def test_rejects_non_strings(self):
        with self.assertRaises(TypeError):
            normalize_string_list([1], field_name="exclude")
        with self.assertRaises(TypeError):
            normalize_string_list(5)


if __name__ == "__main__":
    unittest.main()
