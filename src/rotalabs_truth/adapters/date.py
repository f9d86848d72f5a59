"""Calendar date comparison against the current UTC day."""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Callable, Optional, Union

from rotalabs_truth.adapters.base import BaseAdapter
from rotalabs_truth.core.config import AdapterConfig
from rotalabs_truth.core.exceptions import ConfigurationError
from rotalabs_truth.core.result import AdapterResult, utcnow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DateAdapterConfig(AdapterConfig):
    """Configuration for DateAdapter.

    Attributes:
        target_date: ISO 8601 string, datetime or date. Naive values are
            taken as UTC.
        recurring_yearly: Compare month and day only, ignoring the year.
    """

    target_date: Union[str, datetime, date]
    recurring_yearly: bool = False


def to_utc_date(value: Union[str, datetime, date]) -> date:
    """Normalise a target date to a UTC calendar day.

    Raises:
        ConfigurationError: If the value cannot be parsed.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise ConfigurationError(f"Invalid target_date {value!r}: {exc}") from exc

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.date()
        return value.astimezone(timezone.utc).date()

    if isinstance(value, date):
        return value

    raise ConfigurationError(f"target_date must be an ISO string, datetime or date, got {type(value).__name__}")


class DateAdapter(BaseAdapter[DateAdapterConfig]):
    """Answers True when today (UTC) is the target day.

    Attributes:
        clock: Callable returning the current time. Naive readings are
            taken as UTC.
    """

    config_class = DateAdapterConfig

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        super().__init__()
        self.clock = clock or utcnow

    def _validate(self, config: DateAdapterConfig) -> None:
        to_utc_date(config.target_date)

    async def evaluate(self) -> AdapterResult:
        config = self._require_config()
        target = to_utc_date(config.target_date)

        now = self.clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        today = now.astimezone(timezone.utc).date()

        if config.recurring_yearly:
            is_match = (today.month, today.day) == (target.month, target.day)
        else:
            is_match = today == target

        logger.debug(f"DateAdapter {config.id}: today={today.isoformat()} target={target.isoformat()} match={is_match}")
        return AdapterResult(answer=is_match, timestamp=now)
