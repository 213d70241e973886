"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass, field
from datetime import date
import os
from types import MappingProxyType
from typing import Mapping

import dotenv

from src.domain.constants import DEFAULT_CAPITAL_CUTOFFS, DEFAULT_TOP_N
from src.domain.models import RecordCategory
from src.infrastructure.logging.logger import get_app_logger

_CUTOFF_ENV_VARS = {
    RecordCategory.INVESTMENT: "CAPITAL_START_INVESTMENTS",
    RecordCategory.PAYMENT: "CAPITAL_START_PAYMENTS",
    RecordCategory.SALE: "CAPITAL_START_SALES",
    RecordCategory.EXPENSE: "CAPITAL_START_EXPENSES",
}


@dataclass(frozen=True)
class DashboardSettings:
    """Settings for the dashboard services.

    Attributes:
        username: Operator login name.
        password: Operator password.
        sync_api_key: Bearer key used by the spreadsheet automation.
        session_ttl_minutes: Lifetime of operator sessions.
        top_n: Length of recent-activity and debtor listings.
        capital_cutoffs: Capital accounting start per record category.
    """

    username: str | None = None
    password: str | None = None
    sync_api_key: str | None = None
    session_ttl_minutes: int = 480
    top_n: int = DEFAULT_TOP_N
    capital_cutoffs: Mapping[RecordCategory, date] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_CAPITAL_CUTOFFS))
    )

    @classmethod
    def from_env(cls) -> "DashboardSettings":
        """Build settings from environment variables.

        Returns:
            DashboardSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        return cls(
            username=os.getenv("APP_USERNAME") or None,
            password=os.getenv("APP_PASSWORD") or None,
            sync_api_key=os.getenv("SYNC_API_KEY") or None,
            session_ttl_minutes=cls._read_int(
                "SESSION_TTL_MINUTES", 480, logger=logger
            ),
            top_n=cls._read_int("DASHBOARD_TOP_N", DEFAULT_TOP_N, logger=logger),
            capital_cutoffs=cls._read_cutoffs(logger=logger),
        )

    @staticmethod
    def _read_int(name: str, default: int, logger) -> int:
        """Read a positive integer, falling back to ``default``.

        Args:
            name: Environment variable name.
            default: Value used when missing or invalid.
            logger: Logger used for warnings.

        Returns:
            int: Parsed value.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw.strip())
        except ValueError:
            logger.warning(f"Invalid integer for {name}: '{raw}'")
            return default
        if value <= 0:
            logger.warning(f"{name} must be positive, got {value}")
            return default
        return value

    @staticmethod
    def _read_cutoffs(logger) -> Mapping[RecordCategory, date]:
        """Read per-category capital cutoffs.

        A variable set to an empty string or ``none`` removes the default
        cutoff for that category.

        Args:
            logger: Logger used for warnings.

        Returns:
            Mapping[RecordCategory, date]: Cutoff date per category.
        """
        cutoffs = dict(DEFAULT_CAPITAL_CUTOFFS)
        for category, name in _CUTOFF_ENV_VARS.items():
            raw = os.getenv(name)
            if raw is None:
                continue
            cleaned = raw.strip()
            if not cleaned or cleaned.lower() == "none":
                cutoffs.pop(category, None)
                continue
            try:
                cutoffs[category] = date.fromisoformat(cleaned)
            except ValueError:
                logger.warning(
                    f"Invalid date '{raw}' for {name}. "
                    "Expected format YYYY-MM-DD."
                )
        return MappingProxyType(cutoffs)


__all__ = ["DashboardSettings"]
