from __future__ import annotations

import logging
import sys
from typing import Annotated

from confstack import ConfigLoadRequest, ConfigurationLoader, Int32, RuntimeSnapshot, Value
from confstack.logging import LoggingSettings, init_logging


class AppConfig:
    app_name: Annotated[str, Value("${app.name}")] = ""
    mail_host: Annotated[str, Value("${app.mail-server.host:localhost}")] = ""
    mail_port: Annotated[Int32, Value("${app.mail-server.port:25}")] = 0
    mail_tls: Annotated[bool, Value("${app.mail-server.tls:true}")] = True


def main() -> None:
    init_logging(LoggingSettings(level="INFO"))
    logger = logging.getLogger("demo")

    # Try: python examples/app_config_demo.py --config.profiles.active=dev --app.mail-server.port=2525
    loader = ConfigurationLoader(ConfigLoadRequest(search_paths=("examples",)))
    loader.load_configuration(RuntimeSnapshot.capture(argv=sys.argv[1:], dotenv_path=".env"))

    for key in ("app.mail-server.host", "app.mail-server.port", "app.mail-server.username", "app.mail-server.url"):
        print(f"{key}: {loader.get_property(key)}")

    config = AppConfig()
    loader.inject_config(config)
    logger.info("Profiles active=%s", ",".join(loader.active_profiles) or "-")
    print(f"App name: {config.app_name}")
    print(f"Mail server: {config.mail_host}:{config.mail_port} tls={config.mail_tls}")


if __name__ == "__main__":
    main()
