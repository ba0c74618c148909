import unittest

from confstack.placeholders import PlaceholderEngine, substitute
from confstack.store import ConfigStore


class PlaceholderTests(unittest.TestCase):
    def test_substitutes_known_tokens(self) -> None:
        store = ConfigStore({"app.host": "mail.example.com", "app.url": "smtp://${app.host}:${APP_PORT}"})
        store.put("app.port", "25")
        changed = PlaceholderEngine().resolve_all(store)
        self.assertEqual(changed, 1)
        self.assertEqual(store.get("app.url"), "smtp://mail.example.com:25")

    def test_unknown_token_is_kept(self) -> None:
        store = ConfigStore({"greeting": "hello ${user.name}"})
        PlaceholderEngine().resolve_all(store)
        self.assertEqual(store.get("greeting"), "hello ${user.name}")

    def test_single_pass_uses_one_snapshot(self) -> None:
        store = ConfigStore({"a": "${b}", "b": "${c}", "c": "end"})
        PlaceholderEngine().resolve_all(store)
        self.assertEqual(store.get("a"), "${c}")
        self.assertEqual(store.get("b"), "end")

    def test_self_reference_does_not_loop(self) -> None:
        store = ConfigStore({"loop": "x${loop}"})
        PlaceholderEngine().resolve_all(store)
        self.assertEqual(store.get("loop"), "xx${loop}")

    def test_rerun_on_resolved_values_is_a_no_op(self) -> None:
        store = ConfigStore({"a": "1", "b": "${a}-${a}"})
        engine = PlaceholderEngine()
        engine.resolve_all(store)
        self.assertEqual(engine.resolve_all(store), 0)
        self.assertEqual(store.get("b"), "1-1")

    def test_token_stops_at_first_closing_brace(self) -> None:
        self.assertEqual(substitute("${a}}", {"a": "x"}), "x}")
        self.assertEqual(substitute("${}", {"": "x"}), "${}")


if __name__ == "__main__":
    unittest.main()
