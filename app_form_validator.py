import sys
import os
from pathlib import Path
from PyQt6.QtWidgets import (
    QApplication,
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QFormLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QFileDialog,
    QMessageBox,
)
from PyQt6.QtGui import QAction
from dotenv import load_dotenv
from field_rules import FieldValidations, FieldRulesError
from ui import FormValidationBinder
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class FormValidatorWindow(QMainWindow):
    """Builds a form from a rules file and validates each field as it is edited."""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Form Validator")
        self.setGeometry(100, 100, 480, 360)

        load_dotenv()
        self.rules_file = os.getenv('FIELD_RULES_FILE', './field_rules.json')

        self.binder = None
        self.field_edits: dict[str, QLineEdit] = {}

        menubar = self.menuBar()
        file_menu = menubar.addMenu('File')
        open_action = QAction('Open Rules File', self)
        open_action.setShortcut('Ctrl+O')
        open_action.triggered.connect(self.choose_rules_file)
        file_menu.addAction(open_action)

        self.setCentralWidget(QWidget())
        if Path(self.rules_file).exists():
            self.load_rules(self.rules_file)
        else:
            logger.info(f"No rules file at {self.rules_file}; use File > Open Rules File")

    def choose_rules_file(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open Rules File", "", "JSON files (*.json)")
        if path:
            self.load_rules(path)

    def load_rules(self, path: str):
        """Rebuild the form for the rules in path. A bad config is reported, not attached."""
        try:
            validations = FieldValidations.from_file(path)
            form = self._build_form(validations)
        except (FieldRulesError, OSError) as e:
            logger.error("Could not load rules from %s: %s", path, e)
            QMessageBox.critical(self, "Invalid rules", str(e))
            return
        self.setCentralWidget(form)
        self.rules_file = path
        self.setWindowTitle(f"Form Validator - {Path(path).name}")

    def _build_form(self, validations: FieldValidations) -> QWidget:
        container = QWidget()
        layout = QVBoxLayout(container)
        form_layout = QFormLayout()
        layout.addLayout(form_layout)

        targets: dict[str, QLabel] = {}
        for message_id in sorted(validations.message_ids()):
            label = QLabel(validations.message_text(message_id) or message_id)
            label.setStyleSheet("color: red;")
            targets[message_id] = label

        binder = FormValidationBinder(validations, targets, container)
        self.field_edits = {}
        placed = set()
        for field_name in validations.field_names:
            edit = QLineEdit()
            form_layout.addRow(QLabel(field_name), edit)
            for _, config in validations.rules_for(field_name):
                if config.message_id and config.message_id not in placed:
                    form_layout.addRow("", targets[config.message_id])
                    placed.add(config.message_id)
            binder.attach(field_name, edit)
            self.field_edits[field_name] = edit

        # Group messages sit below the fields.
        for target_id, label in targets.items():
            if target_id not in placed:
                layout.addWidget(label)
                label.setVisible(False)

        check_button = QPushButton("Validate All")
        check_button.clicked.connect(self.validate_all)
        layout.addWidget(check_button)
        layout.addStretch(1)

        self.binder = binder
        return container

    def validate_all(self):
        if self.binder is None:
            return
        if self.binder.validate_all():
            self.statusBar().showMessage("All fields are valid", 3000)
        else:
            self.statusBar().showMessage("Some fields are invalid", 3000)


def main():
    app = QApplication(sys.argv)
    window = FormValidatorWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
