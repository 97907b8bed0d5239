"""Application configuration.

One frozen dataclass holds every knob the app reads at freeze time and the
CLI overrides at launch.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Settings for a waypost ``App``.

    ::

        config = AppConfig(port=3333, max_content_length=64 * 1024)
        app = App(config=config)
    """

    # Where `waypost run` / `App.run()` listen
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # JSON body stage limits
    max_content_length: int = 1024 * 1024
    body_timeout: float = 30.0  # seconds

    # Level for the "waypost" logger
    log_level: str = "info"
