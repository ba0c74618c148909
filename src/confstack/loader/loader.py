from __future__ import annotations

import logging
import re
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from confstack.binding import FieldBinder
from confstack.crypto import AesGcmPropertyEncryptor, EncryptorFactory, SecretCodec
from confstack.errors import BindingError, ConfigLoadError, SourceParseError, SourceUnavailable
from confstack.keys import (
    ENCRYPTION_KEY_PROP,
    PROFILES_ACTIVE_PROP,
    env_name_to_property_key,
    normalize,
)
from confstack.loader.models import ConfigLoadRequest, RuntimeSnapshot
from confstack.placeholders import PlaceholderEngine
from confstack.sources import (
    FORMAT_EXTENSIONS,
    FileSourceReader,
    SourceDescriptor,
    SourceFormat,
    SourceKind,
    SourceReader,
)
from confstack.store import ConfigStore

logger = logging.getLogger(__name__)

_CLI_ARGUMENT = re.compile(r"--([^=]+)=(.*)", re.DOTALL)


def parse_command_line(argv: Sequence[str]) -> List[Tuple[str, str]]:
    """Return (key, value) pairs for every `--key=value` argument, in order."""
    pairs: List[Tuple[str, str]] = []
    for arg in argv:
        match = _CLI_ARGUMENT.fullmatch(arg)
        if match is None:
            logger.debug("config.cli_argument_ignored arg=%s", arg)
            continue
        pairs.append((match.group(1), match.group(2)))
    return pairs


def split_profiles(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [profile.strip() for profile in value.split(",") if profile.strip()]


def _last_match(items: Sequence[Tuple[str, str]] | Mapping[str, str], normalized_key: str) -> Optional[str]:
    pairs = items.items() if isinstance(items, Mapping) else items
    found: Optional[str] = None
    for key, value in pairs:
        if normalize(key) == normalized_key and value:
            found = value
    return found


class ConfigurationLoader:
    """
    Merges file, environment, process-property and command-line sources into one store.

    One instance is meant for a single owner: construct, load, then read or inject.
    """

    def __init__(
        self,
        request: ConfigLoadRequest = ConfigLoadRequest(),
        *,
        reader: Optional[SourceReader] = None,
        encryptor_factory: EncryptorFactory = AesGcmPropertyEncryptor,
    ) -> None:
        self._request = request
        self._reader = reader or FileSourceReader(
            search_paths=request.search_paths,
            resource_package=request.resource_package,
        )
        self._store = ConfigStore()
        self._encryption_key: Optional[str] = None
        self._codec = SecretCodec(self._current_encryption_key, encryptor_factory)
        self._placeholders = PlaceholderEngine()
        self._loaded_sources: List[SourceDescriptor] = []
        self._active_profiles: List[str] = []

    @property
    def request(self) -> ConfigLoadRequest:
        return self._request

    @property
    def store(self) -> ConfigStore:
        return self._store

    @property
    def codec(self) -> SecretCodec:
        return self._codec

    @property
    def loaded_sources(self) -> Tuple[SourceDescriptor, ...]:
        """Sources applied by the last load, weakest first."""
        return tuple(self._loaded_sources)

    @property
    def active_profiles(self) -> Tuple[str, ...]:
        return tuple(self._active_profiles)

    def load_configuration(self, snapshot: Optional[RuntimeSnapshot] = None) -> ConfigStore:
        if snapshot is None:
            snapshot = RuntimeSnapshot.capture()
        self._loaded_sources = []
        cli_pairs = parse_command_line(snapshot.argv)
        base = self._request.base_name
        logger.info("config.load_start base=%s strict=%s", base, self._request.strict)

        self._encryption_key = self._resolve_control_value(ENCRYPTION_KEY_PROP, cli_pairs, snapshot)
        if self._encryption_key:
            self._store.put(ENCRYPTION_KEY_PROP, self._encryption_key)

        self._load_file(base, "properties", "properties-file")
        self._load_file(base, "yaml", "yaml-file")

        profiles_value = self._resolve_control_value(
            PROFILES_ACTIVE_PROP,
            cli_pairs,
            snapshot,
            store_fallback=True,
        )
        self._active_profiles = split_profiles(profiles_value)
        for profile in self._active_profiles:
            profile_name = f"{base}-{profile}"
            self._load_file(profile_name, "properties", "profile-properties-file")
            self._load_file(profile_name, "yaml", "profile-yaml-file")
        if profiles_value:
            # Profile files must not change which profiles are active.
            self._store.put(PROFILES_ACTIVE_PROP, profiles_value)

        self.load_environment_variables(snapshot.environ)
        self.load_system_properties(snapshot.properties)
        if snapshot.argv:
            self._apply(cli_pairs, SourceDescriptor("command-line", "command-line", len(cli_pairs)))

        if self._request.resolve_placeholders:
            self.resolve_placeholders()

        logger.info(
            "config.load_complete keys=%d sources=%d profiles=%s",
            len(self._store),
            len(self._loaded_sources),
            ",".join(self._active_profiles) or "-",
        )
        return self._store

    def load_properties(self, name: Optional[str] = None) -> None:
        self._load_file(name or self._request.base_name, "properties", "properties-file")

    def load_yaml(self, name: Optional[str] = None) -> None:
        self._load_file(name or self._request.base_name, "yaml", "yaml-file")

    def load_environment_variables(self, environ: Mapping[str, str]) -> None:
        prefix = self._request.env_prefix
        pairs = [
            (env_name_to_property_key(name), value)
            for name, value in environ.items()
            if prefix is None or name.startswith(prefix)
        ]
        self._apply(pairs, SourceDescriptor("environment", "environment", len(pairs)))

    def load_system_properties(self, properties: Mapping[str, str]) -> None:
        pairs = list(properties.items())
        self._apply(pairs, SourceDescriptor("system-properties", "system-property", len(pairs)))

    def load_command_line_arguments(self, argv: Sequence[str]) -> None:
        pairs = parse_command_line(argv)
        self._apply(pairs, SourceDescriptor("command-line", "command-line", len(pairs)))

    def resolve_placeholders(self) -> int:
        return self._placeholders.resolve_all(self._store)

    def get_property(self, key: str) -> Optional[str]:
        return self._store.get(key)

    def properties(self) -> Dict[str, str]:
        return dict(self._store.items())

    def encrypt(self, value: str) -> str:
        """Return `value` as an ENC(...) string using the resolved encryption key."""
        return self._codec.encrypt(value)

    def inject_config(self, target: object) -> Tuple[BindingError, ...]:
        return FieldBinder(self._store).inject(target)

    def _current_encryption_key(self) -> Optional[str]:
        return self._encryption_key or self._store.get(ENCRYPTION_KEY_PROP)

    def _resolve_control_value(
        self,
        key: str,
        cli_pairs: Sequence[Tuple[str, str]],
        snapshot: RuntimeSnapshot,
        *,
        store_fallback: bool = False,
    ) -> Optional[str]:
        normalized = normalize(key)
        candidates = [
            _last_match(cli_pairs, normalized),
            _last_match(snapshot.properties, normalized),
            _last_match(snapshot.environ, normalized),
        ]
        if store_fallback:
            candidates.append(self._store.get(key))
        return next((value for value in candidates if value), None)

    def _load_file(self, name: str, fmt: SourceFormat, kind: SourceKind) -> None:
        filename = f"{name}{FORMAT_EXTENSIONS[fmt]}"
        try:
            data = self._reader.read(name, fmt)
        except (SourceUnavailable, SourceParseError) as exc:
            if self._request.strict:
                raise ConfigLoadError(filename, exc) from exc
            if isinstance(exc, SourceParseError):
                logger.warning("config.source_skipped file=%s kind=%s error=%s", filename, kind, exc)
            else:
                logger.info("config.source_missing file=%s kind=%s", filename, kind)
            return
        self._apply(list(data.items()), SourceDescriptor(filename, kind, len(data)))

    def _apply(self, pairs: Sequence[Tuple[str, str]], descriptor: SourceDescriptor) -> None:
        for key, value in pairs:
            self._store.put(key, self._codec.decrypt_if_wrapped(value))
        self._loaded_sources.append(descriptor)
        logger.debug(
            "config.source_applied name=%s kind=%s rank=%d keys=%d",
            descriptor.name,
            descriptor.kind,
            descriptor.rank,
            descriptor.key_count,
        )
