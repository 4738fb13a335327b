import contextlib
import io
import json
import sys
import unittest
from datetime import date
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from ai_heads.cli import report
from ai_heads.data.db import connect, init_db
from ai_heads.data.seed import seed_projects
from ai_heads.data.storage import SqliteProjectStore

TODAY = date(2026, 3, 15)


class ReportCliTests(unittest.TestCase):
    def setUp(self) -> None:
        self.con = connect(":memory:")
        init_db(self.con)
        self.store = SqliteProjectStore(self.con)
        self.store.save(seed_projects(now_ms=0))

    def tearDown(self) -> None:
        self.con.close()

    def test_leaderboard_json(self) -> None:
        buffer = io.StringIO()
        with contextlib.redirect_stdout(buffer):
            count = report.run_leaderboard(self.store, TODAY, as_json=True)
        self.assertEqual(count, 3)
        rows = json.loads(buffer.getvalue())
        self.assertEqual(rows[0], {
            "head": "Shourya",
            "score": 50,
            "done": 1,
            "inProgress": 0,
            "blocked": 0,
            "pendingApprovals": 0,
            "overdueApprovals": 0,
        })
        # p1: in-progress bonus 5, pending -2, overdue -10
        self.assertEqual([r["head"] for r in rows[1:]], ["Badri", "Avisek"])
        self.assertEqual([r["score"] for r in rows[1:]], [-7, -7])

    def test_leaderboard_table(self) -> None:
        buffer = io.StringIO()
        with contextlib.redirect_stdout(buffer):
            report.run_leaderboard(self.store, TODAY, as_json=False)
        output = buffer.getvalue()
        self.assertIn("Shourya", output)
        self.assertIn("🏆 Leader", output)

    def test_at_risk(self) -> None:
        buffer = io.StringIO()
        with contextlib.redirect_stdout(buffer):
            count = report.run_at_risk(self.store, TODAY, as_json=True)
        self.assertEqual(count, 1)
        rows = json.loads(buffer.getvalue())
        self.assertEqual(rows[0]["id"], "p1")
        self.assertEqual(rows[0]["reasons"], ["1 overdue approval(s)"])

    def test_at_risk_none(self) -> None:
        buffer = io.StringIO()
        with contextlib.redirect_stdout(buffer):
            count = report.run_at_risk(self.store, date(2026, 1, 1), as_json=False)
        self.assertEqual(count, 0)
        self.assertIn("No projects at risk.", buffer.getvalue())

    def test_parse_today(self) -> None:
        self.assertEqual(report._parse_today("2026-03-15"), TODAY)
        self.assertEqual(report._parse_today(None), date.today())
        with self.assertRaises(ValueError):
            report._parse_today("15/03/2026")

    def test_main_rejects_bad_today(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                report.main(["leaderboard", "--today", "tomorrow", "--db-path", ":memory:"])


if __name__ == "__main__":
    unittest.main()
