import sys
import unittest
from datetime import date
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from ai_heads.app.pages import projects as projects_page
from ai_heads.domain.models import Approval, Project
from ai_heads.services import projects as project_service


def _payload(**overrides):
    base = {
        "title": "Eval harness",
        "vendor": "Darsa",
        "ai_heads": ["Badri", "Stranger"],
        "status": "In Progress",
        "progress": 120,
        "start_date": date(2026, 3, 1),
        "target_date": "2026-04-01",
    }
    base.update(overrides)
    return base


class BuildProjectTests(unittest.TestCase):
    def test_build_new_project(self) -> None:
        project = project_service.build_project(_payload())
        self.assertTrue(project.id.startswith("p"))
        self.assertEqual(project.ai_heads, ("Badri",))
        self.assertEqual(project.progress, 100)
        self.assertEqual(project.start_date, "2026-03-01")
        self.assertEqual(project.target_date, "2026-04-01")
        self.assertIsNotNone(project.updated_at)

    def test_edit_keeps_id_and_approvals(self) -> None:
        approval = project_service.new_approval("Legal", "Mia", "2026-03-20")
        existing = Project(id="p9", title="Old", approvals=(approval,))
        project = project_service.build_project(_payload(title="New"), existing=existing)
        self.assertEqual(project.id, "p9")
        self.assertEqual(project.title, "New")
        self.assertEqual(project.approvals, (approval,))

    def test_validation_errors(self) -> None:
        cases = [
            _payload(title="  "),
            _payload(vendor="Unknown Ltd"),
            _payload(status="Paused"),
            _payload(start_date="2026-05-01", target_date="2026-04-01"),
            _payload(target_date="someday"),
        ]
        for payload in cases:
            with self.assertRaises(ValueError):
                project_service.build_project(payload)

    def test_optional_dates(self) -> None:
        project = project_service.build_project(_payload(start_date=None, target_date=""))
        self.assertIsNone(project.start_date)
        self.assertIsNone(project.target_date)


class ApprovalTests(unittest.TestCase):
    def test_new_approval_is_pending(self) -> None:
        approval = project_service.new_approval(" Security review ", " Ops ", date(2026, 3, 20))
        self.assertEqual(approval.state, "Pending")
        self.assertEqual(approval.title, "Security review")
        self.assertEqual(approval.owner, "Ops")
        self.assertEqual(approval.due_date, "2026-03-20")

    def test_new_approval_requires_title(self) -> None:
        with self.assertRaises(ValueError):
            project_service.new_approval("")

    def test_add_and_resolve_approval(self) -> None:
        project = Project(id="p1", title="T")
        approval = project_service.new_approval("Sign", "Rajan", "2026-03-01")
        project = project_service.add_approval(project, approval)
        self.assertEqual(len(project.approvals), 1)

        resolved = project_service.set_approval_state(project, approval.id, "Approved")
        self.assertEqual(resolved.approvals[0].state, "Approved")
        self.assertEqual(project.approvals[0].state, "Pending")

        with self.assertRaises(ValueError):
            project_service.set_approval_state(project, approval.id, "Maybe")


class ApprovalStateWidgetTests(unittest.TestCase):
    def test_options_keep_unknown_stored_state(self) -> None:
        self.assertEqual(project_service.approval_state_options("Pending"), ["Pending", "Approved", "Rejected"])
        options = project_service.approval_state_options("Waived")
        self.assertEqual(options[-1], "Waived")
        self.assertEqual(options.index("Waived"), 3)
        self.assertEqual(project_service.approval_state_options(""), ["Pending", "Approved", "Rejected"])

    def test_unchanged_pick_writes_nothing(self) -> None:
        waived = Approval("a1", "Legal", "Rajan", "2026-03-01", "Waived")
        self.assertIsNone(project_service.approval_state_change(waived, "Waived"))
        pending = Approval("a2", "UI", "Rajan", "2026-03-01", "Pending")
        self.assertIsNone(project_service.approval_state_change(pending, "Pending"))
        self.assertIsNone(project_service.approval_state_change(pending, None))

    def test_real_change_is_returned(self) -> None:
        waived = Approval("a1", "Legal", "Rajan", "2026-03-01", "Waived")
        self.assertEqual(project_service.approval_state_change(waived, "Approved"), "Approved")
        pending = Approval("a2", "UI", "Rajan", "2026-03-01", "Pending")
        self.assertEqual(project_service.approval_state_change(pending, "Rejected"), "Rejected")

    def test_pick_outside_known_states_is_ignored(self) -> None:
        pending = Approval("a2", "UI", "Rajan", "2026-03-01", "Pending")
        self.assertIsNone(project_service.approval_state_change(pending, "Waived"))


class FlashMessageTests(unittest.TestCase):
    def test_message_survives_one_rerun(self) -> None:
        state = {}
        self.assertIsNone(projects_page.take_flash(state))
        projects_page.stash_flash(state, "Project saved.")
        self.assertEqual(projects_page.take_flash(state), "Project saved.")
        self.assertIsNone(projects_page.take_flash(state))


if __name__ == "__main__":
    unittest.main()
