from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QBrush, QCloseEvent, QColor
from PySide6.QtWidgets import (
    QComboBox,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from typeflow.core.achievements import get_achievement
from typeflow.core.progress import CompletionReport, UserProgress, average_wpm, complete_session, snapshot
from typeflow.core.progression import level_progress_percent, xp_for_level
from typeflow.core.session import Session, SessionTracker
from typeflow.core.texts import Difficulty, TextRepository
from typeflow.ui.colors import Palette, blend_hex
from typeflow.ui.models import build_achievement_rows, build_challenge_rows
from typeflow.ui.ticker import SessionTicker

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Single-screen practice window: test area on the left, progress on the right."""

    def __init__(self, texts: TextRepository, progress: Optional[UserProgress] = None) -> None:
        super().__init__()
        self.setWindowTitle("TypeFlow")
        self._texts = texts
        self._progress = progress if progress is not None else UserProgress()
        self._tracker = SessionTracker()
        self._ticker = SessionTicker(self._tracker, parent=self)
        self._ticker.ticked.connect(self._update_live_stats)

        self._build_ui()
        self._refresh_progress_panel()

    @property
    def progress(self) -> UserProgress:
        return self._progress

    def _build_ui(self) -> None:
        root = QWidget(self)
        root.setStyleSheet(
            f"""
            QWidget {{ background: {Palette.BG}; color: {Palette.TEXT_PRIMARY}; }}
            QFrame#card {{
                background: {Palette.CARD_BG};
                border: 1px solid {Palette.CARD_BORDER};
                border-radius: 12px;
            }}
            QProgressBar {{
                background: {Palette.XP_TRACK};
                border: none;
                border-radius: 4px;
                height: 8px;
            }}
            QProgressBar::chunk {{ background: {Palette.XP_FILL}; border-radius: 4px; }}
            """
        )
        layout = QHBoxLayout(root)
        layout.addWidget(self._build_practice_card(), 3)
        layout.addWidget(self._build_progress_card(), 2)
        self.setCentralWidget(root)

    def _card(self) -> tuple[QFrame, QVBoxLayout]:
        frame = QFrame()
        frame.setObjectName("card")
        inner = QVBoxLayout(frame)
        inner.setContentsMargins(16, 16, 16, 16)
        return frame, inner

    def _build_practice_card(self) -> QFrame:
        frame, inner = self._card()

        controls = QHBoxLayout()
        self.difficulty_box = QComboBox()
        for difficulty in Difficulty:
            self.difficulty_box.addItem(difficulty.value.capitalize(), difficulty)
        self.start_button = QPushButton("New test")
        self.start_button.clicked.connect(self.start_test)
        controls.addWidget(self.difficulty_box)
        controls.addStretch(1)
        controls.addWidget(self.start_button)
        inner.addLayout(controls)

        self.target_label = QLabel("Press “New test” to begin.")
        self.target_label.setWordWrap(True)
        self.target_label.setStyleSheet("font-size: 20px; font-family: monospace;")
        inner.addWidget(self.target_label, 1)

        self.input_box = QLineEdit()
        self.input_box.setEnabled(False)
        self.input_box.setPlaceholderText("Start typing…")
        self.input_box.textChanged.connect(self._on_text_changed)
        inner.addWidget(self.input_box)

        stats = QGridLayout()
        self.wpm_label = self._stat(stats, 0, "WPM")
        self.accuracy_label = self._stat(stats, 1, "Accuracy")
        self.errors_label = self._stat(stats, 2, "Errors")
        self.time_label = self._stat(stats, 3, "Time")
        inner.addLayout(stats)

        self.result_label = QLabel("")
        self.result_label.setWordWrap(True)
        self.result_label.setStyleSheet(f"color: {Palette.ACCENT};")
        inner.addWidget(self.result_label)
        self._reset_live_stats()
        return frame

    def _stat(self, grid: QGridLayout, column: int, title: str) -> QLabel:
        caption = QLabel(title)
        caption.setStyleSheet(f"color: {Palette.TEXT_MUTED}; font-size: 11px;")
        value = QLabel("")
        value.setStyleSheet("font-size: 28px; font-weight: 800;")
        grid.addWidget(caption, 0, column, Qt.AlignHCenter)
        grid.addWidget(value, 1, column, Qt.AlignHCenter)
        return value

    def _build_progress_card(self) -> QFrame:
        frame, inner = self._card()

        self.rank_label = QLabel("")
        self.rank_label.setStyleSheet("font-size: 18px; font-weight: 700;")
        self.level_label = QLabel("")
        self.xp_bar = QProgressBar()
        self.xp_bar.setTextVisible(False)
        self.xp_label = QLabel("")
        self.xp_label.setStyleSheet(f"color: {Palette.TEXT_SECONDARY};")
        self.next_rank_label = QLabel("")
        self.next_rank_label.setStyleSheet(f"color: {Palette.TEXT_MUTED};")
        self.stats_label = QLabel("")
        for widget in (self.rank_label, self.level_label, self.xp_bar, self.xp_label, self.next_rank_label, self.stats_label):
            inner.addWidget(widget)

        inner.addWidget(QLabel("Daily challenges"))
        self.challenges_list = QListWidget()
        inner.addWidget(self.challenges_list, 1)

        inner.addWidget(QLabel("Achievements"))
        self.achievements_list = QListWidget()
        inner.addWidget(self.achievements_list, 1)
        return frame

    def start_test(self) -> None:
        """Pick a text for the selected difficulty and reset the practice area."""
        self._ticker.cancel()
        difficulty = self.difficulty_box.currentData()
        text = self._texts.select_text(difficulty)
        self._tracker.start(text)
        self.target_label.setText(text)
        self.result_label.setText("")
        self.input_box.blockSignals(True)
        self.input_box.clear()
        self.input_box.blockSignals(False)
        self.input_box.setEnabled(True)
        self.input_box.setFocus()
        self._reset_live_stats()

    def _on_text_changed(self, value: str) -> None:
        if self._tracker.session is None or self._tracker.is_finished():
            return
        result = self._tracker.on_input(value)
        session = self._tracker.session
        if result is not None:
            self._ticker.cancel()
            self.input_box.setEnabled(False)
            self._update_live_stats(session)
            self._apply_report(complete_session(self._progress, result))
            return
        if self._tracker.is_active() and not self._ticker.is_running():
            self._ticker.start()
        self._update_live_stats(session)

    def _apply_report(self, report: CompletionReport) -> None:
        self._progress = report.progress
        result = self._tracker.result
        lines = [f"Finished in {result.elapsed_seconds:.1f}s · +{report.xp_gained} XP"]
        if report.leveled_up:
            lines.append(f"Level up! {report.old_level} → {report.progress.level}")
        for achievement_id in report.newly_unlocked:
            achievement = get_achievement(achievement_id)
            lines.append(f"{achievement.icon} {achievement.name} (+{achievement.xp_reward} XP)")
        self.result_label.setText("\n".join(lines))
        self._refresh_progress_panel()

    def _reset_live_stats(self) -> None:
        self.wpm_label.setText("0")
        self.accuracy_label.setText("100%")
        self.errors_label.setText("0")
        self.time_label.setText("0.0s")

    def _update_live_stats(self, session: Optional[Session]) -> None:
        if session is None:
            return
        self.wpm_label.setText(f"{session.wpm}")
        self.accuracy_label.setText(f"{session.accuracy}%")
        self.errors_label.setText(f"{session.error_count}")
        self.time_label.setText(f"{session.elapsed_ms / 1000.0:.1f}s")

    def _refresh_progress_panel(self) -> None:
        snap = snapshot(self._progress)
        tint = blend_hex(snap.rank.color, Palette.TEXT_PRIMARY, 0.15)
        self.rank_label.setText(f"{snap.rank.icon} {snap.rank.name}")
        self.rank_label.setStyleSheet(f"font-size: 18px; font-weight: 700; color: {tint};")
        self.level_label.setText(f"Level {snap.level}")
        self.xp_bar.setRange(0, 100)
        self.xp_bar.setValue(int(level_progress_percent(snap.xp, snap.level)))
        self.xp_label.setText(f"{snap.xp} / {xp_for_level(snap.level)} XP")
        if snap.next_rank is None:
            self.next_rank_label.setText("Max rank reached")
        else:
            self.next_rank_label.setText(f"Next: {snap.next_rank.icon} {snap.next_rank.name} at level {snap.next_rank.min_level}")
        self.stats_label.setText(
            f"Tests {self._progress.total_tests} · Best {self._progress.best_wpm} WPM · "
            f"Avg {average_wpm(self._progress)} WPM"
        )

        self.challenges_list.clear()
        for row in build_challenge_rows(self._progress.challenges):
            mark = "✓" if row.status.complete else f"{row.status.progress_percent:.0f}%"
            shown = min(row.status.current_count, row.status.target)
            self.challenges_list.addItem(
                QListWidgetItem(f"{row.challenge.name}: {shown}/{row.status.target} ({mark}) · +{row.challenge.xp_reward} XP")
            )

        self.achievements_list.clear()
        for row in build_achievement_rows(snap.unlocked):
            item = QListWidgetItem(f"{row.achievement.icon} {row.achievement.name} · {row.achievement.description}")
            if not row.unlocked:
                item.setForeground(QBrush(QColor(Palette.TEXT_MUTED)))
            self.achievements_list.addItem(item)

    def closeEvent(self, event: QCloseEvent) -> None:
        self._ticker.cancel()
        logger.info("Closing after %d tests", self._progress.total_tests)
        super().closeEvent(event)
