import unittest
from unittest.mock import patch
from io import StringIO

from mvnpublisher.src.context import Console, DryRunCommandRunner


class TestDryRunCommandRunner(unittest.TestCase):
    def test_run(self):
        runner = DryRunCommandRunner()

        with patch("sys.stdout", new=StringIO()) as fake_out:
            result = runner.run(["git", "push", "origin", "main"], cwd="/repo", stream=True)

            output = fake_out.getvalue()
            self.assertIn("[DRY] git push origin main", output)
            self.assertIn("(cwd: /repo)", output)

        self.assertEqual(result.returncode, 0)
        self.assertEqual(result.command, ["git", "push", "origin", "main"])
        self.assertTrue(result.streamed)

    def test_run_shows_shell_prefix(self):
        runner = DryRunCommandRunner(shell_prefix=("cmd", "/c"))

        with patch("sys.stdout", new=StringIO()) as fake_out:
            runner.run(["mvn", "-v"])

        self.assertIn("[DRY] cmd /c mvn -v", fake_out.getvalue())


class TestConsole(unittest.TestCase):
    def test_levels(self):
        console = Console("error")
        with patch("sys.stdout", new=StringIO()) as fake_out, patch("sys.stderr", new=StringIO()) as fake_err:
            console.info("hidden")
            console.debug("hidden")
            console.error("shown")

        self.assertEqual(fake_out.getvalue(), "")
        self.assertEqual(fake_err.getvalue(), "[ERROR] shown\n")

    def test_unknown_level_defaults_to_info(self):
        console = Console("loud")
        with patch("sys.stdout", new=StringIO()) as fake_out:
            console.info("hello")
            console.debug("hidden")
        self.assertEqual(fake_out.getvalue(), "[INFO] hello\n")

    def test_dry(self):
        with patch("sys.stdout", new=StringIO()) as fake_out:
            Console(dry_run=False).dry("hidden")
            Console(dry_run=True).dry("shown")
        self.assertEqual(fake_out.getvalue(), "[DRY] shown\n")


if __name__ == "__main__":
    unittest.main()
