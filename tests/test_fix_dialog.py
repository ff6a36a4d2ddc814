from __future__ import annotations

import pytest

pytest.importorskip("PyQt6.QtWidgets")

import fix_dialog
from auto_fail_detector import FixDecision, FixProposal


@pytest.mark.parametrize(
    ("button_name", "decision"),
    [("Yes", FixDecision.ACCEPT), ("No", FixDecision.REJECT), ("Cancel", FixDecision.ABORT)],
)
def test_message_box_buttons_map_to_decisions(monkeypatch, button_name, decision) -> None:
    seen = {}

    def fake_question(parent, title, text, buttons, default_button):
        seen["title"] = title
        seen["text"] = text
        return getattr(fix_dialog.QMessageBox.StandardButton, button_name)

    monkeypatch.setattr(fix_dialog.QMessageBox, "question", fake_question)

    proposal = FixProposal(number=3, solution=[1, 0], padding_count=1, guide_text="Extra objects before 100: 1")
    assert fix_dialog.QtFixDecider()(proposal) is decision
    assert seen["title"] == "Solution 3"
    assert seen["text"].startswith("Extra objects before 100: 1")
    assert seen["text"].endswith("Do you want to use this solution?")
