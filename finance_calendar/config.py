"""Runtime settings for the finance calendar engine and its HTTP adapter."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DOUBLE_PAY_POLICIES = ("ignore", "reject")
TRUTHY = {"1", "true", "yes", "on"}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class EngineSettings:
    # ignore: double-pay dates outside the active range never accrue
    # reject: such incomes are refused at add time
    double_pay_policy: str = "ignore"
    seed_sample: bool = False
    log_level: str = "INFO"
    port: int = 8000


def settings_from_env() -> EngineSettings:
    """Builds settings from env flags.

    Env vars:
      FINANCE_CALENDAR_DOUBLE_PAY_POLICY=ignore|reject
      FINANCE_CALENDAR_SEED_SAMPLE=1       -> start with the sample events
      FINANCE_CALENDAR_LOG_LEVEL=DEBUG
      FINANCE_CALENDAR_PORT=8000
    """
    policy = str(os.getenv("FINANCE_CALENDAR_DOUBLE_PAY_POLICY", "ignore")).strip().lower()
    if policy not in DOUBLE_PAY_POLICIES:
        raise ValueError(f"Unknown double pay policy: {policy!r} (expected one of {', '.join(DOUBLE_PAY_POLICIES)})")
    return EngineSettings(
        double_pay_policy=policy,
        seed_sample=str(os.getenv("FINANCE_CALENDAR_SEED_SAMPLE", "")).lower() in TRUTHY,
        log_level=str(os.getenv("FINANCE_CALENDAR_LOG_LEVEL", "INFO")).upper(),
        port=int(os.getenv("FINANCE_CALENDAR_PORT", 8000)),
    )


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return
    logging.basicConfig(level=level, format=LOG_FORMAT)
