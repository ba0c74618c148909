import unittest

from confstack.keys import (
    ENCRYPTION_KEY_ENV,
    PROFILES_ACTIVE_ENV,
    env_name_to_property_key,
    normalize,
    to_env_name,
)


class KeyNormalizationTests(unittest.TestCase):
    def test_case_and_punctuation_collapse(self) -> None:
        self.assertEqual(normalize("App.Name"), "appname")
        self.assertEqual(normalize("APP_NAME"), "appname")
        self.assertEqual(normalize("app-name"), "appname")
        self.assertEqual(normalize("appname"), "appname")

    def test_normalize_is_idempotent(self) -> None:
        for key in ("app.mail-server.port", "CONFIG_ENCRYPTION_KEY", "x.Y_z", ""):
            self.assertEqual(normalize(normalize(key)), normalize(key))

    def test_empty_key(self) -> None:
        self.assertEqual(normalize(""), "")

    def test_non_ascii_is_dropped(self) -> None:
        self.assertEqual(normalize("app.näme"), "appnme")

    def test_env_name_mapping(self) -> None:
        self.assertEqual(to_env_name("app.mail.host"), "APP_MAIL_HOST")
        self.assertEqual(env_name_to_property_key("APP_MAIL_HOST"), "app.mail.host")
        self.assertEqual(ENCRYPTION_KEY_ENV, "CONFIG_ENCRYPTION_KEY")
        self.assertEqual(PROFILES_ACTIVE_ENV, "CONFIG_PROFILES_ACTIVE")


if __name__ == "__main__":
    unittest.main()
