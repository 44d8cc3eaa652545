"""Sentry settings for the practice log, read from the environment."""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class MonitoringConfig:
    """Error-tracking settings. Leaving ``sentry_dsn`` unset disables Sentry."""

    sentry_dsn: Optional[str] = None
    # Local CLI installs default to "development"
    sentry_environment: str = "development"
    sentry_traces_sample_rate: float = 0.0
    app_name: str = "cuelog"

    @classmethod
    def from_env(cls) -> "MonitoringConfig":
        return cls(
            sentry_dsn=os.getenv("SENTRY_DSN") or None,
            sentry_environment=os.getenv("SENTRY_ENVIRONMENT", "development"),
            sentry_traces_sample_rate=float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.0")),
            app_name=os.getenv("CUELOG_APP_NAME", "cuelog"),
        )

    @property
    def sentry_enabled(self) -> bool:
        return bool(self.sentry_dsn)
