"""Unit tests for schema projection of columns and form fields."""

import unittest

from record_console.browser.modal import ModalMode
from record_console.browser.projection import fetch_field_names, project_columns, project_form_fields
from record_console.schemas.metadata import EntityType

ACCOUNT = EntityType(name="Account", list_fields=("Name", "Industry"), form_fields=("Name", "Rating"))
RECORD = {"Id": "001", "Name": "Acme", "Industry": "Energy", "Rating": "Hot"}


class ProjectColumnsTests(unittest.TestCase):
    def test_first_column_opens_record_and_actions_trail(self) -> None:
        columns = project_columns(ACCOUNT)

        self.assertEqual([column.field_name for column in columns], ["Name", "Industry", None])
        self.assertEqual(columns[0].type, "button")
        self.assertEqual(columns[0].click_action, "edit")
        self.assertEqual(columns[1].type, "text")
        self.assertEqual(columns[-1].type, "action")
        self.assertEqual([action.name for action in columns[-1].row_actions], ["delete", "edit", "view"])

    def test_plain_text_columns_when_open_record_column_disabled(self) -> None:
        columns = project_columns(ACCOUNT, open_record_column=False)

        self.assertEqual([column.type for column in columns], ["text", "text", "action"])
        self.assertIsNone(columns[0].click_action)

    def test_entity_without_list_fields_still_exposes_row_actions(self) -> None:
        columns = project_columns(EntityType(name="Empty"))

        self.assertEqual(len(columns), 1)
        self.assertEqual(columns[0].type, "action")


class ProjectFormFieldsTests(unittest.TestCase):
    def test_create_mode_has_null_values_and_hidden_id(self) -> None:
        fields = project_form_fields(ACCOUNT, None, ModalMode.CREATE)

        self.assertEqual([field.name for field in fields], ["Name", "Rating", "Id"])
        self.assertTrue(all(field.value is None for field in fields))
        self.assertTrue(fields[-1].hidden)
        self.assertFalse(fields[0].hidden)

    def test_edit_and_view_modes_read_values_from_draft(self) -> None:
        for mode in (ModalMode.EDIT, ModalMode.VIEW):
            with self.subTest(mode=mode):
                fields = project_form_fields(ACCOUNT, RECORD, mode)
                self.assertEqual(
                    {field.name: field.value for field in fields},
                    {"Name": "Acme", "Rating": "Hot", "Id": "001"},
                )
                self.assertEqual(fields[-1].visibility, "hidden")

    def test_projection_is_deterministic(self) -> None:
        self.assertEqual(
            project_form_fields(ACCOUNT, RECORD, ModalMode.EDIT),
            project_form_fields(ACCOUNT, RECORD, ModalMode.EDIT),
        )
        self.assertEqual(project_columns(ACCOUNT), project_columns(ACCOUNT))

    def test_projection_does_not_mutate_draft(self) -> None:
        draft = dict(RECORD)
        project_form_fields(ACCOUNT, draft, ModalMode.EDIT)

        self.assertEqual(draft, RECORD)

    def test_explicit_id_form_field_is_not_duplicated(self) -> None:
        entity = EntityType(name="Account", form_fields=("Id", "Name"))

        fields = project_form_fields(entity, RECORD, ModalMode.EDIT)

        self.assertEqual([field.name for field in fields], ["Name", "Id"])


class FetchFieldNamesTests(unittest.TestCase):
    def test_union_is_deduplicated_in_first_occurrence_order(self) -> None:
        self.assertEqual(fetch_field_names(ACCOUNT), ["Name", "Rating", "Industry"])


if __name__ == "__main__":
    unittest.main()
