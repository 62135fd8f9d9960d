# src/hcal/core/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

log = logging.getLogger(__name__)

ENV_IN_ISRAEL = "HCAL_IN_ISRAEL"
ENV_MODERN_HOLIDAYS = "HCAL_MODERN_HOLIDAYS"
ENV_MUKAF_CHOMA = "HCAL_MUKAF_CHOMA"
ENV_LOG_LEVEL = "HCAL_LOG_LEVEL"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


# ============================================================
# env helpers
# ============================================================

def _env_truthy(name: str, default: bool = False) -> bool:
    v = os.environ.get(name)
    if v is None or not v.strip():
        return default
    return v.strip().lower() in ("1", "true", "yes", "y", "on")


@dataclass(frozen=True)
class CalendarConfig:
    """
    Observance flags consulted by the holiday resolver and parsha assigner.

    - in_israel: one-day Yom Tov, Israeli parsha table
    - use_modern_holidays: Yom HaShoah, Yom Hazikaron, Yom Ha'atzmaut, Yom Yerushalayim
    - is_mukaf_choma: walled city, Purim is observed on the 15th
    """
    in_israel: bool = False
    use_modern_holidays: bool = False
    is_mukaf_choma: bool = False

    @classmethod
    def from_env(cls) -> "CalendarConfig":
        """Load flags from HCAL_* environment variables."""
        config = cls(
            in_israel=_env_truthy(ENV_IN_ISRAEL),
            use_modern_holidays=_env_truthy(ENV_MODERN_HOLIDAYS),
            is_mukaf_choma=_env_truthy(ENV_MUKAF_CHOMA),
        )
        log.debug("calendar config from env: %s", config)
        return config

    def with_overrides(
        self,
        *,
        in_israel: bool | None = None,
        use_modern_holidays: bool | None = None,
        is_mukaf_choma: bool | None = None,
    ) -> "CalendarConfig":
        return CalendarConfig(
            in_israel=self.in_israel if in_israel is None else bool(in_israel),
            use_modern_holidays=(
                self.use_modern_holidays if use_modern_holidays is None else bool(use_modern_holidays)
            ),
            is_mukaf_choma=self.is_mukaf_choma if is_mukaf_choma is None else bool(is_mukaf_choma),
        )


DEFAULT_CONFIG = CalendarConfig()


@dataclass(frozen=True)
class ApiConfig:
    default_limit_days: int = 370
    max_limit_days: int = 2000
    calendar: CalendarConfig = field(default_factory=CalendarConfig)

    @classmethod
    def from_env(cls) -> "ApiConfig":
        return cls(calendar=CalendarConfig.from_env())


def setup_logging(level: str | None = None) -> None:
    """Configure root logging; level defaults to $HCAL_LOG_LEVEL or INFO."""
    name = (level or os.environ.get(ENV_LOG_LEVEL, "INFO")).strip().upper()
    lvl = getattr(logging, name, None)
    if not isinstance(lvl, int):
        raise ValueError(f"unknown log level: {name}")
    logging.basicConfig(level=lvl, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
