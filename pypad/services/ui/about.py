# pypad/services/ui/about.py
from __future__ import annotations

from pathlib import Path

from PyQt6.QtWidgets import (
    QDialog,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
)

from pypad.utils.constants import APP_NAME


class AboutDialog(QDialog):
    def __init__(self, version: str, config_path: Path | None = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle(f"About {APP_NAME}")
        self.setModal(False)

        # Widgets
        self.close_btn = QPushButton("OK")

        self.name_label = QLabel(APP_NAME)
        self.version_label = QLabel(f"Version {version}")
        self.blurb_label = QLabel("A plain text and Markdown editor with sudo saving.")
        self.config_label = QLabel(
            f"Config: {config_path}" if config_path else "Config: built-in defaults"
        )

        # Layouts
        form = QGridLayout()
        form.addWidget(self.name_label, 0, 0)
        form.addWidget(self.version_label, 1, 0)
        form.addWidget(self.blurb_label, 2, 0)
        form.addWidget(self.config_label, 3, 0)

        buttons = QHBoxLayout()
        buttons.addStretch(1)
        buttons.addWidget(self.close_btn)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addLayout(buttons)

        # Signals
        self.close_btn.clicked.connect(self.close)
