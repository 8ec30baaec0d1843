"""Unit tests for pagination/search state and the modal lifecycle."""

import unittest

from record_console.browser.modal import ModalMode, ModalState
from record_console.browser.pagination import PageState
from record_console.errors import BrowserErrorKind, ModalTransitionError, PreconditionError


class PageStateTests(unittest.TestCase):
    def test_set_search_trims_without_moving_offset(self) -> None:
        page = PageState(limit=5, offset=10)

        page.set_search("  acme  ")

        self.assertEqual(page.search_string, "acme")
        self.assertEqual(page.offset, 10)
        page.set_search(None)
        self.assertEqual(page.search_string, "")

    def test_advance_and_retreat_step_by_limit(self) -> None:
        page = PageState(limit=5)
        page.record_page(5)

        page.advance()
        page.advance()
        self.assertEqual(page.offset, 10)
        page.retreat()
        self.assertEqual(page.offset, 5)

    def test_retreat_from_first_page_is_rejected(self) -> None:
        page = PageState(limit=5)

        self.assertTrue(page.disable_previous)
        with self.assertRaises(PreconditionError) as ctx:
            page.retreat()
        self.assertEqual(ctx.exception.kind, BrowserErrorKind.PRECONDITION)
        self.assertEqual(page.offset, 0)

    def test_short_page_disables_next(self) -> None:
        page = PageState(limit=5)
        page.record_page(4)

        self.assertTrue(page.disable_next)
        with self.assertRaises(PreconditionError):
            page.advance()
        page.record_page(5)
        self.assertFalse(page.disable_next)

    def test_reset_can_clear_search(self) -> None:
        page = PageState(limit=5, offset=15, search_string="acme")

        page.reset()
        self.assertEqual((page.offset, page.search_string), (0, "acme"))
        page.reset(clear_search=True)
        self.assertEqual(page.search_string, "")

    def test_limit_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            PageState(limit=0)


class ModalStateTests(unittest.TestCase):
    def test_create_starts_without_draft(self) -> None:
        modal = ModalState()

        modal.open_create()

        self.assertEqual(modal.mode, ModalMode.CREATE)
        self.assertIsNone(modal.draft)
        self.assertTrue(modal.visible)
        self.assertTrue(modal.save_visible)

    def test_edit_and_view_share_the_record(self) -> None:
        record = {"Id": "1", "Name": "Acme"}
        modal = ModalState()

        modal.open_edit(record)
        self.assertIs(modal.draft, record)
        modal.close()
        modal.open_view(record)
        self.assertTrue(modal.view_mode)
        self.assertFalse(modal.save_visible)

    def test_close_is_reachable_from_every_state(self) -> None:
        for opener in ("open_create", "open_edit", "open_view", None):
            with self.subTest(opener=opener):
                modal = ModalState()
                if opener == "open_create":
                    modal.open_create()
                elif opener is not None:
                    getattr(modal, opener)({"Id": "1"})
                modal.close()
                self.assertEqual(modal.mode, ModalMode.NONE)
                self.assertIsNone(modal.draft)
                self.assertFalse(modal.visible)

    def test_switching_between_open_modes_is_illegal(self) -> None:
        modal = ModalState()
        modal.open_edit({"Id": "1"})

        with self.assertRaises(ModalTransitionError):
            modal.open_view({"Id": "1"})
        with self.assertRaises(ModalTransitionError):
            modal.open_create()
        self.assertEqual(modal.mode, ModalMode.EDIT)

    def test_generation_changes_on_open_and_close_only(self) -> None:
        modal = ModalState()
        modal.close()
        self.assertEqual(modal.generation, 0)

        modal.open_create()
        opened = modal.generation
        modal.close()
        modal.open_create()

        self.assertEqual(opened, 1)
        self.assertEqual(modal.generation, 3)


if __name__ == "__main__":
    unittest.main()
