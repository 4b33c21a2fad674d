import contextlib
import io
import os
import tempfile
import unittest

from lexor.main import main


class MainTestCase(unittest.TestCase):

    def setUp(self):
        self.directory = tempfile.TemporaryDirectory()
        self.addCleanup(self.directory.cleanup)

    def write(self, name, text):
        path = os.path.join(self.directory.name, name)
        with open(path, "w", encoding="utf-8") as file:
            file.write(text)
        return path

    def run_main(self, *argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        code = 0
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
            try:
                main(list(argv))
            except SystemExit as error:
                code = error.code
        return code, stdout.getvalue(), stderr.getvalue()

    def test_run(self):
        program = self.write("greet.lexor", 'SCRIPT AREA\nSTART SCRIPT\nDECLARE CHAR c\nSCAN: c\n'
                                            'PRINT: "got " & c & $\nEND SCRIPT\n')
        stdin = self.write("input.txt", "z\n")

        code, out, err = self.run_main(program, "--input", stdin)
        self.assertEqual(0, code)
        self.assertEqual("got z\n", out)
        self.assertEqual("", err)

    def test_runtime_failure(self):
        program = self.write("fail.lexor", 'SCRIPT AREA\nSTART SCRIPT\nPRINT: "partial"\nPRINT: y\nEND SCRIPT\n')
        stdin = self.write("input.txt", "")

        code, out, err = self.run_main(program, "-i", stdin)
        self.assertEqual(1, code)
        self.assertEqual("partial", out)
        self.assertIn("undefined variable 'y'", err)
        self.assertIn("fail.lexor:4:8", err)

    def test_parse_failure(self):
        program = self.write("bad.lexor", "SCRIPT AREA\nSTART SCRIPT\nPRINT 1\nEND SCRIPT\n")
        stdin = self.write("input.txt", "")

        code, out, err = self.run_main(program, "-i", stdin)
        self.assertEqual(1, code)
        self.assertEqual("", out)
        self.assertIn("parse error: ", err)

    def test_missing_files(self):
        stdin = self.write("input.txt", "")
        code, __, err = self.run_main(os.path.join(self.directory.name, "missing.lexor"), "-i", stdin)
        self.assertEqual(1, code)
        self.assertIn("could not be opened", err)

        program = self.write("ok.lexor", "SCRIPT AREA START SCRIPT END SCRIPT")
        code, __, err = self.run_main(program, "-i", os.path.join(self.directory.name, "missing.txt"))
        self.assertEqual(1, code)
        self.assertIn("could not be opened", err)


if __name__ == '__main__':
    unittest.main()
