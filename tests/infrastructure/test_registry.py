import unittest
from unittest import TestCase

from keyml.infrastructure.utils import Registry


class Widget:
    def __init__(self, size: int = 1) -> None:
        self.size = size


class TestRegistry(TestCase):
    def setUp(self) -> None:
        self.reg = Registry("widget")
        self.reg.register("Widget")(Widget)

    def test_lookup_is_case_insensitive(self):
        self.assertIs(self.reg.get("widget"), Widget)
        self.assertIs(self.reg.get("WIDGET"), Widget)
        self.assertIn("wIdGeT", self.reg)
        self.assertNotIn(3, self.reg)

    def test_create_passes_kwargs(self):
        w = self.reg.create("widget", size=4)
        self.assertIsInstance(w, Widget)
        self.assertEqual(w.size, 4)

    def test_duplicate_registration_raises(self):
        with self.assertRaises(ValueError):
            self.reg.register("widget")(Widget)

    def test_overwrite(self):
        class Other:
            pass

        self.reg.register("widget", overwrite=True)(Other)
        self.assertIs(self.reg.get("widget"), Other)

    def test_unknown_name_lists_available(self):
        with self.assertRaises(ValueError) as ctx:
            self.reg.get("gadget")
        self.assertIn("widget", str(ctx.exception))

    def test_available_is_sorted(self):
        self.reg.register("alpha")(Widget)
        self.assertEqual(self.reg.available(), ("alpha", "widget"))

    def test_empty_name_rejected(self):
        with self.assertRaises(ValueError):
            self.reg.register("")


if __name__ == "__main__":
    unittest.main()
