import io
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

from tileclimb.config import CONFIG
from tileclimb.experiments.report import read_csv
from tileclimb.experiments.runner import build_parser, main, run


class RunnerTestCase(unittest.TestCase):
    def test_both_experiments_print_reports(self):
        args = build_parser().parse_args([
            "--size", "2", "--hc_trials", "50", "--sa_trials", "3",
            "--iterations", "20", "--t_min", "0.01", "--max_time", "0.5",
            "--workers", "1", "--seed", "3", "--no_progress",
        ])
        buf = io.StringIO()
        with redirect_stdout(buf):
            summaries = run(args)

        out = buf.getvalue()
        self.assertIn("Running hill-climb...", out)
        self.assertIn("Running simulated annealing...", out)
        self.assertEqual(2, out.count("Board Size: 2"))
        self.assertIn("Iterations: 50", out)
        self.assertEqual(["hc", "sa"], [s.algorithm for s in summaries])
        self.assertEqual(50, int(summaries[0].histogram.sum()))
        self.assertEqual(3, int(summaries[1].histogram.sum()))

    def test_writes_csv(self):
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "hc.csv"
            buf = io.StringIO()
            with redirect_stdout(buf):
                main(["--algo", "hc", "--size", "3", "--hc_trials", "40", "--workers", "1",
                      "--seed", "9", "--no_progress", "--out", str(out)])
            df = read_csv(out)
        self.assertEqual(9, len(df))
        self.assertEqual(40, int(df["count"].sum()))
        self.assertIn(f"Wrote {out}", buf.getvalue())

    def test_progress_default_comes_from_config(self):
        self.assertEqual(not CONFIG.parallel.progress_bar, build_parser().parse_args([]).no_progress)
        with mock.patch.object(CONFIG.parallel, "progress_bar", False):
            self.assertTrue(build_parser().parse_args([]).no_progress)
        with mock.patch.object(CONFIG.parallel, "progress_bar", True):
            self.assertFalse(build_parser().parse_args([]).no_progress)
            self.assertTrue(build_parser().parse_args(["--no_progress"]).no_progress)

    def test_rejects_bad_alpha(self):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main(["--algo", "sa", "--alpha", "1.5"])
        self.assertEqual(2, ctx.exception.code)


if __name__ == "__main__":
    unittest.main()
