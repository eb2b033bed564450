from collections.abc import Mapping

from PyQt6.QtCore import QMetaObject, QObject, pyqtSignal
from PyQt6.QtWidgets import QLineEdit, QWidget
from field_rules import FieldValidations, TargetNotFoundError
import logging

logger = logging.getLogger(__name__)

VALID_BORDER = "QLineEdit { border: 1px solid green; }"
INVALID_BORDER = "QLineEdit { border: 1px solid red; }"


class FormValidationBinder(QObject):
    """
    Wires line edits to their field rules.
    Validation runs when the user finishes editing a field (Enter or focus out).
    Failing rules reveal their message widget; the edit's border turns red.
    A group message stays visible while any field in the group is failing.
    """

    # Emitted after every validation. Payload: (field_name: str, valid: bool)
    field_validated = pyqtSignal(str, bool)

    def __init__(self, field_validations: FieldValidations, message_targets: Mapping[str, QWidget], parent=None):
        super().__init__(parent)
        self.field_validations = field_validations
        self.message_targets = dict(message_targets)
        self._edits: dict[str, QLineEdit] = {}
        self._connections: dict[str, tuple[QLineEdit, QMetaObject.Connection]] = {}
        # group_id -> names of fields currently failing a rule in that group
        self._failing_groups: dict[str, set[str]] = {}

    def _target(self, target_id: str, kind: str) -> QWidget:
        widget = self.message_targets.get(target_id)
        if widget is None:
            logger.error("Message target %s does not exist", target_id)
            raise TargetNotFoundError(target_id, kind)
        return widget

    def attach(self, field_name: str, line_edit: QLineEdit):
        """Bind a line edit to the rules of field_name. Raises TargetNotFoundError.

        Attaching a field again replaces its previous line edit.
        """
        targets = []
        for kind, config in self.field_validations.rules_for(field_name):
            if config.message_id:
                targets.append(self._target(config.message_id, kind))
            if config.group_id:
                targets.append(self._target(config.group_id, kind))

        for widget in targets:
            widget.setVisible(False)

        previous = self._connections.pop(field_name, None)
        if previous is not None:
            old_edit, connection = previous
            old_edit.editingFinished.disconnect(connection)

        self._edits[field_name] = line_edit
        connection = line_edit.editingFinished.connect(lambda name=field_name: self.validate_field(name))
        self._connections[field_name] = (line_edit, connection)
        logger.info("Attached validation to field %s", field_name)

    def validate_field(self, field_name: str) -> bool:
        line_edit = self._edits.get(field_name)
        if line_edit is None:
            return True

        results = self.field_validations.validate(field_name, line_edit.text())
        valid = all(results)

        # Two rules may share a message slot; it shows if either fails.
        failing_messages = {r.message_id for r in results if r.message_id and not r.valid}
        failing_groups = {r.group_id for r in results if r.group_id and not r.valid}
        for message_id in {r.message_id for r in results if r.message_id}:
            self.message_targets[message_id].setVisible(message_id in failing_messages)

        for _, config in self.field_validations.rules_for(field_name):
            if config.group_id:
                self._update_group(config.group_id, field_name, config.group_id in failing_groups)

        line_edit.setStyleSheet(VALID_BORDER if valid else INVALID_BORDER)
        self.field_validated.emit(field_name, valid)
        return valid

    def _update_group(self, group_id: str, field_name: str, failing: bool):
        members = self._failing_groups.setdefault(group_id, set())
        if failing:
            members.add(field_name)
        else:
            members.discard(field_name)
        self.message_targets[group_id].setVisible(bool(members))

    def validate_all(self) -> bool:
        results = [self.validate_field(name) for name in self._edits]
        return all(results)
