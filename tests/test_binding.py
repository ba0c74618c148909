import unittest
from dataclasses import dataclass
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict

from confstack.binding import FieldBinder, Float32, Int32, Int64, Value, bound_fields, coerce, parse_binding
from confstack.errors import FormatError, UnsupportedFieldType
from confstack.store import ConfigStore


class MailServerConfig:
    host: Annotated[str, Value("${app.mail-server.host:localhost}")] = ""
    port: Annotated[Int32, Value("${app.mail-server.port:25}")] = 0
    tls: Annotated[bool, Value("${app.mail-server.tls:false}")] = False
    timeout: Annotated[float, Value("app.mail-server.timeout")] = 0.0
    unbound: str = "untouched"


class ExtendedMailServerConfig(MailServerConfig):
    max_size: Annotated[Int64, Value("${app.mail-server.max-size}")] = 0


class ParseBindingTests(unittest.TestCase):
    def test_forms(self) -> None:
        cases = {
            "${app.name}": ("app.name", None),
            "app.name": ("app.name", None),
            "${app.name:demo}": ("app.name", "demo"),
            " ${ app.name :demo } ": ("app.name", "demo"),
            "${app.url:http://localhost:8080}": ("app.url", "http://localhost:8080"),
            "${app.name:}": ("app.name", ""),
        }
        for expression, (key, default) in cases.items():
            with self.subTest(expression=expression):
                binding = parse_binding(expression)
                self.assertEqual(binding.key, key)
                self.assertEqual(binding.default, default)


class CoercionTests(unittest.TestCase):
    def test_primitives(self) -> None:
        self.assertEqual(coerce("42", int, field_name="f"), 42)
        self.assertEqual(coerce(" 42 ", Int32, field_name="f"), 42)
        self.assertEqual(coerce("9000000000", Int64, field_name="f"), 9000000000)
        self.assertEqual(coerce("2.5", float, field_name="f"), 2.5)
        self.assertEqual(coerce("0.1", Float32, field_name="f"), 0.10000000149011612)
        self.assertIs(coerce("true", bool, field_name="f"), True)
        self.assertIs(coerce("false", bool, field_name="f"), False)
        self.assertEqual(coerce(" padded ", str, field_name="f"), " padded ")

    def test_optional(self) -> None:
        self.assertIsNone(coerce("", Optional[int], field_name="f"))
        self.assertEqual(coerce("7", Optional[int], field_name="f"), 7)

    def test_format_errors(self) -> None:
        cases = [("abc", int), ("3000000000", Int32), ("1.5x", float), ("maybe", bool)]
        for raw, target in cases:
            with self.subTest(raw=raw):
                with self.assertRaises(FormatError) as ctx:
                    coerce(raw, target, field_name="port")
                self.assertEqual(ctx.exception.field_name, "port")
                self.assertEqual(ctx.exception.raw_value, raw)

    def test_unsupported_type(self) -> None:
        with self.assertRaises(UnsupportedFieldType) as ctx:
            coerce("a,b", List[str], field_name="items")
        self.assertIn("items", str(ctx.exception))


class FieldBinderTests(unittest.TestCase):
    def test_store_values_are_bound(self) -> None:
        store = ConfigStore(
            {
                "app.mail-server.host": "mail.example.com",
                "app.mail-server.port": "587",
                "app.mail-server.tls": "true",
                "app.mail-server.timeout": "2.5",
            }
        )
        config = MailServerConfig()
        failures = FieldBinder(store).inject(config)
        self.assertEqual(failures, ())
        self.assertEqual(config.host, "mail.example.com")
        self.assertEqual(config.port, 587)
        self.assertIs(config.tls, True)
        self.assertEqual(config.timeout, 2.5)
        self.assertEqual(config.unbound, "untouched")

    def test_defaults_and_skipped_fields(self) -> None:
        config = MailServerConfig()
        FieldBinder(ConfigStore()).inject(config)
        self.assertEqual(config.host, "localhost")
        self.assertEqual(config.port, 25)
        self.assertIs(config.tls, False)
        # No value and no default: left alone.
        self.assertEqual(config.timeout, 0.0)
        self.assertNotIn("timeout", vars(config))

    def test_environment_style_key_fallback(self) -> None:
        store = ConfigStore()
        store.put("APP_MAIL-SERVER_HOST", "env-host")
        binder = FieldBinder(store)
        self.assertEqual(binder.resolve(parse_binding("${app.mail-server.host}")), "env-host")

    def test_inherited_fields_are_bound(self) -> None:
        store = ConfigStore({"app.mail-server.max-size": "10485760"})
        config = ExtendedMailServerConfig()
        FieldBinder(store).inject(config)
        self.assertEqual(config.max_size, 10485760)
        self.assertEqual(config.host, "localhost")
        self.assertEqual(
            [field.name for field in bound_fields(ExtendedMailServerConfig)],
            ["host", "port", "tls", "timeout", "max_size"],
        )

    def test_format_error_does_not_stop_other_fields(self) -> None:
        store = ConfigStore({"app.mail-server.port": "not-a-number", "app.mail-server.host": "smtp"})
        config = MailServerConfig()
        with self.assertLogs("confstack.binding.binder", level="WARNING"):
            failures = FieldBinder(store).inject(config)
        self.assertEqual(len(failures), 1)
        self.assertIsInstance(failures[0], FormatError)
        self.assertEqual(failures[0].field_name, "port")
        self.assertEqual(config.port, 0)
        self.assertEqual(config.host, "smtp")
        self.assertIs(config.tls, False)

    def test_unsupported_field_type_is_reported(self) -> None:
        class WithList:
            recipients: Annotated[List[str], Value("${app.recipients:a,b}")] = []
            name: Annotated[str, Value("${app.name:demo}")] = ""

        config = WithList()
        with self.assertLogs("confstack.binding.binder", level="WARNING"):
            failures = FieldBinder(ConfigStore()).inject(config)
        self.assertIsInstance(failures[0], UnsupportedFieldType)
        self.assertEqual(config.name, "demo")

    def test_assignment_failure_is_isolated(self) -> None:
        @dataclass(frozen=True)
        class Frozen:
            name: Annotated[str, Value("${app.name:demo}")] = ""

        config = Frozen()
        with self.assertLogs("confstack.binding.binder", level="WARNING"):
            failures = FieldBinder(ConfigStore()).inject(config)
        self.assertEqual(len(failures), 1)
        self.assertEqual(failures[0].field_name, "name")
        self.assertEqual(config.name, "")

    def test_frozen_pydantic_model_failures_are_collected(self) -> None:
        class FrozenSettings(BaseModel):
            model_config = ConfigDict(frozen=True)

            host: Annotated[str, Value("${app.host:localhost}")] = ""
            port: Annotated[int, Value("${app.port:25}")] = 0

        settings = FrozenSettings()
        with self.assertLogs("confstack.binding.binder", level="WARNING"):
            failures = FieldBinder(ConfigStore()).inject(settings)
        self.assertEqual([failure.field_name for failure in failures], ["host", "port"])
        self.assertEqual(settings.host, "")

    def test_setter_value_error_does_not_stop_other_fields(self) -> None:
        class Guarded:
            first: Annotated[int, Value("${app.first:-1}")] = 0
            second: Annotated[int, Value("${app.second:2}")] = 0

            def __setattr__(self, name: str, value: object) -> None:
                if name == "first" and value < 0:
                    raise ValueError("must be positive")
                super().__setattr__(name, value)

        target = Guarded()
        with self.assertLogs("confstack.binding.binder", level="WARNING"):
            failures = FieldBinder(ConfigStore()).inject(target)
        self.assertEqual(len(failures), 1)
        self.assertEqual(failures[0].field_name, "first")
        self.assertIsInstance(failures[0].__cause__, ValueError)
        self.assertEqual(target.first, 0)
        self.assertEqual(target.second, 2)

    def test_store_is_not_modified(self) -> None:
        store = ConfigStore({"app.mail-server.host": "h"})
        FieldBinder(store).inject(MailServerConfig())
        self.assertEqual(store.snapshot(), {"appmailserverhost": "h"})

    def test_rebinding_sees_new_values(self) -> None:
        store = ConfigStore({"app.mail-server.port": "1"})
        config = MailServerConfig()
        binder = FieldBinder(store)
        binder.inject(config)
        store.put("app.mail-server.port", "2")
        binder.inject(config)
        self.assertEqual(config.port, 2)


if __name__ == "__main__":
    unittest.main()
