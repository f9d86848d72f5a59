"""Ready-made transform functions for chained adapters.

A transform receives the source adapter's result and returns the
configuration the target adapter is reconfigured with. Transforms raise on
unusable input; the chain lets that error propagate.
"""

from rotalabs_truth.adapters.date import DateAdapterConfig, to_utc_date
from rotalabs_truth.core.result import AdapterResult


def matched_value_as_date(result: AdapterResult) -> DateAdapterConfig:
    """Use a matched date (e.g. a birthday scraped from a page) as a yearly date target.

    Args:
        result: Source result whose metadata carries ``matched_value`` as an
            ISO 8601 date string.

    Returns:
        DateAdapterConfig matching that month and day every year.

    Raises:
        ValueError: If the result has no matched value or it is not a date.
    """
    matched_value = result.metadata.get("matched_value")
    if not result.answer or not matched_value:
        raise ValueError("No date found in source result")

    return DateAdapterConfig(
        id="target-date",
        name="Target Date",
        target_date=to_utc_date(matched_value).isoformat(),
        recurring_yearly=True,
    )
