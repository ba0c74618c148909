"""Key canonicalization shared by the store, the loader and the binder."""

from __future__ import annotations

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]")

ENCRYPTION_KEY_PROP = "config.encryption.key"
PROFILES_ACTIVE_PROP = "config.profiles.active"


def normalize(key: str) -> str:
    """Lowercase and drop every character outside [a-z0-9]."""
    return _NON_ALNUM.sub("", key.lower())


def to_env_name(key: str) -> str:
    """`app.name` -> `APP_NAME`."""
    return key.upper().replace(".", "_")


def env_name_to_property_key(env_name: str) -> str:
    """`APP_NAME` -> `app.name`."""
    return env_name.lower().replace("_", ".")


ENCRYPTION_KEY_ENV = to_env_name(ENCRYPTION_KEY_PROP)
PROFILES_ACTIVE_ENV = to_env_name(PROFILES_ACTIVE_PROP)
