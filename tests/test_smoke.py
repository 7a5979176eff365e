import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from hmscript import cmdline

base_folder = Path(__file__).parent.parent
examples = base_folder/"examples"

def _run(path, *flags):
	""" Returns (exit status, standard output, standard error). """
	with mock.patch("sys.stdout", new_callable=io.StringIO) as out:
		with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
			status = cmdline.run(cmdline.parser.parse_args([*flags, str(path)]))
	return status, out.getvalue(), err.getvalue()

class ScratchFolderTestCase(unittest.TestCase):

	def setUp(self) -> None:
		self._folder = tempfile.TemporaryDirectory()
		self.folder = Path(self._folder.name)

	def tearDown(self) -> None:
		self._folder.cleanup()

	def write(self, text, name="program.hm") -> Path:
		path = self.folder/name
		path.write_text(text, encoding="utf-8")
		return path

	def run_text(self, text, *flags):
		return _run(self.write(text), *flags)

class ScenarioTests(ScratchFolderTestCase):
	""" Small whole programs, with the exact output each one must produce. """

	def check(self, expected, body):
		status, out, err = self.run_text("$Main\nclass Main {\n%s\n}\n" % body)
		self.assertEqual(0, status, err)
		self.assertEqual(expected, out)

	def test_scenarios(self):
		for expected, body in [
			("hello", '    print("hello")'),
			("7", "    int x = 3\n    int y = 4\n    print(x + y)"),
			("abc", '    str s = "ABC"\n    print(s.lower)'),
			("012", "    for (int i in 3) {\n        print(i)\n    }"),
			("[0, 2, 4, 6]", "    print([i * 2 for int i in 4])"),
			("olleh", '    str s = "hello"\n    print(s[::-1])'),
		]:
			with self.subTest(expected):
				self.check(expected, body)

	def test_unknown_identifier_prints_none(self):
		self.check("none", "    print(nobody)")

class ExampleSmokeTests(unittest.TestCase):
	""" Run all the examples; Test for no smoke. """

	def test_examples(self):
		for name, expected in [
			("hello", "hello"),
			("loops", "total=10\n243\nhello olleH el\n[H, e, l, l, o]\n[0, 1, 4, 9]\n4"),
			("shapes", "5.0\n[3, 4] 2 7\nmany\n"),
		]:
			with self.subTest(name):
				status, out, err = _run(examples/(name+".hm"))
				self.assertEqual(0, status, err)
				self.assertEqual(expected, out)
				self.assertEqual("", err)

class FailureTests(ScratchFolderTestCase):
	""" Each way a run can go wrong gives status 1 and says something on standard error. """

	def test_missing_file(self):
		status, out, err = _run(self.folder/"nowhere.hm")
		self.assertEqual(1, status)
		self.assertEqual("", out)
		self.assertIn("Could not open file", err)

	def test_missing_entry_directive(self):
		status, out, err = self.run_text('class Main {\n    print("x")\n}\n')
		self.assertEqual(1, status)
		self.assertEqual("", out)
		self.assertIn("Main class not found", err)

	def test_missing_entry_class(self):
		status, out, err = self.run_text('$Main\nclass Other {\n    print("x")\n}\n')
		self.assertEqual(1, status)
		self.assertEqual("", out)
		self.assertIn("Main class not found", err)

	def test_division_by_zero_stops_the_run(self):
		status, out, err = self.run_text('$Main\nclass Main {\n    print("a")\n    int z = 0\n    print(1 / z)\n    print("b")\n}\n')
		self.assertEqual(1, status)
		self.assertEqual("a", out)
		self.assertIn("The program stopped", err)
		self.assertIn("print(1 / z)", err)

class CommandLineTests(ScratchFolderTestCase):

	def test_default_program_is_in_the_working_directory(self):
		self.write('$Main\nclass Main {\n    print("found")\n}\n')
		with mock.patch("pathlib.Path.cwd", return_value=self.folder):
			with mock.patch("sys.stdout", new_callable=io.StringIO) as out:
				status = cmdline.run(cmdline.parser.parse_args([]))
		self.assertEqual(0, status)
		self.assertEqual("found", out.getvalue())

	def test_main_exits_with_the_status(self):
		path = self.write('$Main\nclass Main {\n    print("x")\n}\n')
		with mock.patch("sys.stdout", new_callable=io.StringIO):
			with self.assertRaises(SystemExit) as caught:
				cmdline.main([str(path)])
		self.assertEqual(0, caught.exception.code)

	def test_verbose_traces_to_standard_error(self):
		status, out, err = self.run_text('$Main\nclass Main {\n    what is this\n    print("ok")\n}\n', "-v")
		self.assertEqual(0, status)
		self.assertEqual("ok", out)
		self.assertIn("Running class Main", err)
		self.assertIn("what is this", err)

if __name__ == '__main__':
	unittest.main()
