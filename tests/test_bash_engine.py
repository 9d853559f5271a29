import shutil
import tempfile
import unittest
from pathlib import Path

from shelltesting.engines.base import EngineError, ModuleImportError, unwrap
from shelltesting.engines.bash_engine import BashEngine
from shelltesting.errors import ShellExecutionHasErrors
from shelltesting.shell import ShellSession

HAS_BASH = shutil.which("bash") is not None


def values(pipeline):
    return [unwrap(item) for item in pipeline.output]


@unittest.skipUnless(HAS_BASH, "bash is not installed")
class TestBashRunspace(unittest.TestCase):
    def setUp(self):
        self.runspace = BashEngine().create_runspace()
        self.runspace.open()
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.runspace.close()
        self.tmp.cleanup()

    def test_stdout_lines_are_results(self):
        pipeline = self.runspace.invoke("echo a\necho b")
        self.assertEqual(values(pipeline), ["a", "b"])
        self.assertEqual(pipeline.errors, [])

    def test_output_without_trailing_newline(self):
        self.assertEqual(values(self.runspace.invoke("printf abc")), ["abc"])
        self.assertEqual(values(self.runspace.invoke("true")), [])
        self.assertEqual(values(self.runspace.invoke("echo")), [""])

    def test_stderr_lines_are_errors(self):
        pipeline = self.runspace.invoke("echo out\necho err >&2\necho after")
        self.assertEqual(values(pipeline), ["out", "after"])
        self.assertEqual([e.message for e in pipeline.errors], ["err"])

    def test_unknown_command_is_an_error(self):
        pipeline = self.runspace.invoke("definitely-not-a-command-xyz")
        self.assertEqual(len(pipeline.errors), 1)
        self.assertIn("definitely-not-a-command-xyz", pipeline.errors[0].message)

    def test_state_persists_between_invocations(self):
        self.runspace.invoke("greeting=hello\nshout() { echo \"$1!\"; }")
        self.assertEqual(values(self.runspace.invoke("shout \"$greeting\"")), ["hello!"])

    def test_get_variable(self):
        self.runspace.invoke("name='two words'\nempty=")
        self.assertEqual(unwrap(self.runspace.get_variable("name")), "two words")
        self.assertEqual(unwrap(self.runspace.get_variable("empty")), "")
        self.assertIsNone(self.runspace.get_variable("never_set"))

    def test_get_variable_rejects_invalid_names(self):
        with self.assertRaises(ValueError):
            self.runspace.get_variable("not a name")

    def test_scripts_do_not_read_the_control_stream(self):
        self.assertEqual(values(self.runspace.invoke("cat")), [])
        self.assertEqual(values(self.runspace.invoke("echo still-alive")), ["still-alive"])

    def test_import_module_sources_the_file(self):
        path = Path(self.tmp.name) / "greet.sh"
        path.write_text('greet() { echo "Hello $1"; }\n', encoding="utf-8")
        self.runspace.import_module(str(path))
        self.assertEqual(values(self.runspace.invoke("greet World")), ["Hello World"])

    def test_import_missing_module(self):
        with self.assertRaises(ModuleImportError) as ctx:
            self.runspace.import_module(str(Path(self.tmp.name) / "absent.sh"))
        self.assertTrue(ctx.exception.errors)

    def test_exit_breaks_the_runspace(self):
        with self.assertRaises(EngineError):
            self.runspace.invoke("exit 3")

    def test_close(self):
        self.runspace.close()
        self.assertFalse(self.runspace.is_open)
        with self.assertRaises(EngineError):
            self.runspace.invoke("echo 1")


@unittest.skipUnless(HAS_BASH, "bash is not installed")
class TestShellSessionOnBash(unittest.TestCase):
    def setUp(self):
        self.shell = ShellSession(engine=BashEngine())

    def tearDown(self):
        self.shell.close()

    def test_pre_and_post_commands_wrap_the_commands(self):
        self.shell.set_post_execution_commands("echo 4", "echo 5")
        self.shell.set_pre_execution_commands("echo 1", "echo 2")
        self.assertEqual(self.shell.execute("echo 3"), ["1", "2", "3", "4", "5"])

    def test_commands_may_span_several_entries(self):
        self.assertEqual(self.shell.execute("for i in 1 2; do", "echo $i", "done"), ["1", "2"])

    def test_fresh_runspace_per_execute(self):
        self.shell.execute("counter=1")
        self.assertEqual(self.shell.get_variable_value("counter"), "1")
        self.shell.execute("true")
        self.assertIsNone(self.shell.get_variable_value("counter"))

    def test_errors_raise_with_results_kept(self):
        with self.assertRaises(ShellExecutionHasErrors):
            self.shell.execute("echo before", "echo oops >&2")
        self.assertEqual(self.shell.last_results, ["before"])
        self.assertEqual([e.message for e in self.shell.last_errors], ["oops"])


if __name__ == "__main__":
    unittest.main()
