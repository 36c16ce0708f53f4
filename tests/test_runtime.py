import unittest
from unittest.mock import patch

from garden_registry.infrastructure.runtime import MonotonicClock, StaticIdentity, identity_from_env, new_garden_id


class TestMonotonicClock(unittest.TestCase):
    def test_never_goes_backwards(self) -> None:
        readings = iter([100, 50, 200])
        clock = MonotonicClock(source=lambda: next(readings))

        self.assertEqual([clock(), clock(), clock()], [100, 100, 200])


class TestIdentity(unittest.TestCase):
    def test_static_identity(self) -> None:
        self.assertEqual(StaticIdentity("alice")(), "alice")

    def test_empty_token_rejected(self) -> None:
        with self.assertRaises(ValueError):
            StaticIdentity("")

    def test_falls_back_to_login_name(self) -> None:
        with patch.dict("os.environ", {"GARDEN_CALLER": ""}), \
                patch("garden_registry.infrastructure.runtime.getpass.getuser", return_value="gardener"):
            self.assertEqual(identity_from_env()(), "gardener")


class TestGardenIds(unittest.TestCase):
    def test_ids_are_distinct(self) -> None:
        self.assertNotEqual(new_garden_id(), new_garden_id())
