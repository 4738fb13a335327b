import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from ai_heads.domain.models import Approval, Project, clamp_progress, coerce_project


class ProjectModelTests(unittest.TestCase):
    def test_from_dict_reads_stored_shape(self) -> None:
        project = Project.from_dict(
            {
                "id": "p1",
                "title": "Instant Report UX polish",
                "vendor": "Agilisium",
                "aiHeads": ["Badri", "Avisek"],
                "status": "In Progress",
                "progress": 60,
                "startDate": "2026-01-05",
                "targetDate": "2026-02-20",
                "approvals": [
                    {"id": "a1", "title": "UI signoff", "owner": "Rajan", "dueDate": "2026-02-01", "state": "Pending"}
                ],
                "updatedAt": 1700000000000,
            }
        )
        self.assertEqual(project.ai_heads, ("Badri", "Avisek"))
        self.assertEqual(project.start_date, "2026-01-05")
        self.assertEqual(project.approvals[0], Approval("a1", "UI signoff", "Rajan", "2026-02-01", "Pending"))
        self.assertEqual(project.updated_at, 1700000000000)
        self.assertEqual(project.to_dict()["aiHeads"], ["Badri", "Avisek"])
        self.assertEqual(project.to_dict()["approvals"][0]["dueDate"], "2026-02-01")

    def test_from_dict_accepts_snake_case_keys(self) -> None:
        project = Project.from_dict({"id": "x", "ai_heads": ["Shourya"], "target_date": "2026-05-01"})
        self.assertEqual(project.ai_heads, ("Shourya",))
        self.assertEqual(project.target_date, "2026-05-01")

    def test_from_dict_weakest_values(self) -> None:
        project = Project.from_dict({"aiHeads": None, "approvals": {"a": 1}, "progress": None})
        self.assertEqual(project.id, "")
        self.assertEqual(project.ai_heads, ())
        self.assertEqual(project.approvals, ())
        self.assertEqual(project.progress, 0)
        self.assertIsNone(project.start_date)
        self.assertIsNone(project.updated_at)

    def test_duplicate_heads_are_kept(self) -> None:
        project = Project.from_dict({"aiHeads": ["Badri", "Badri", None, ""]})
        self.assertEqual(project.ai_heads, ("Badri", "Badri"))

    def test_clamp_progress(self) -> None:
        self.assertEqual(clamp_progress(-5), 0)
        self.assertEqual(clamp_progress(150), 100)
        self.assertEqual(clamp_progress("42"), 42)
        self.assertEqual(clamp_progress("abc"), 0)
        self.assertEqual(clamp_progress(float("nan")), 0)
        self.assertEqual(clamp_progress(float("inf")), 100)
        self.assertEqual(clamp_progress(float("-inf")), 0)
        self.assertEqual(clamp_progress(True), 0)

    def test_clamp_progress_keeps_small_positive_values_positive(self) -> None:
        self.assertEqual(clamp_progress(0.4), 1)
        self.assertEqual(clamp_progress("0.01"), 1)
        self.assertEqual(clamp_progress(0.0), 0)
        self.assertEqual(clamp_progress(-0.4), 0)
        self.assertEqual(clamp_progress(42.6), 43)
        self.assertEqual(clamp_progress(99.7), 100)

    def test_huge_numbers_do_not_overflow(self) -> None:
        self.assertEqual(clamp_progress(10**400), 100)
        self.assertEqual(clamp_progress(-(10**400)), 0)
        self.assertEqual(clamp_progress("1e400"), 100)
        self.assertEqual(Project.from_dict({"progress": 10**400}).progress, 100)
        self.assertEqual(Project.from_dict({"progress": "1e999"}).progress, 100)

    def test_non_finite_updated_at_is_dropped(self) -> None:
        for value in ("inf", "-inf", "nan", float("inf"), float("nan"), 1e999):
            with self.subTest(value=value):
                self.assertIsNone(Project.from_dict({"id": "p", "updatedAt": value}).updated_at)
        self.assertEqual(Project.from_dict({"updatedAt": "1700000000000"}).updated_at, 1700000000000)
        self.assertEqual(Project.from_dict({"updatedAt": 1.5}).updated_at, 1)

    def test_coerce_project(self) -> None:
        project = Project(id="p", title="T")
        self.assertIs(coerce_project(project), project)
        self.assertEqual(coerce_project({"id": "q"}).id, "q")
        self.assertIsNone(coerce_project("p"))
        self.assertIsNone(coerce_project(None))


if __name__ == "__main__":
    unittest.main()
