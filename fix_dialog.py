"""\
fix_dialog.py

Qt decision prompt for the auto-fail fix dialogue.

Shows each proposed solution in a Yes / No / Cancel message box:
- Yes accepts the solution
- No asks for the next solution
- Cancel stops without fixing
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtWidgets import QApplication, QMessageBox, QWidget

from auto_fail_detector import FixDecision, FixProposal


class QtFixDecider:
    def __init__(self, *, parent: Optional[QWidget] = None) -> None:
        self._parent = parent

    def __call__(self, proposal: FixProposal) -> FixDecision:
        text = proposal.guide_text + "\n\nDo you want to use this solution?"
        result = QMessageBox.question(
            self._parent,
            f"Solution {proposal.number}",
            text,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No | QMessageBox.StandardButton.Cancel,
            QMessageBox.StandardButton.Yes,
        )

        if result == QMessageBox.StandardButton.Yes:
            return FixDecision.ACCEPT
        if result == QMessageBox.StandardButton.No:
            return FixDecision.REJECT
        return FixDecision.ABORT


def ensure_application() -> QApplication:
    """Return the running QApplication, creating one for command line use."""
    import sys

    existing = QApplication.instance()
    if isinstance(existing, QApplication):
        return existing
    return QApplication(sys.argv)
