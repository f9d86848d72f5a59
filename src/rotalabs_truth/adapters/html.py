"""Regex matching against fetched markup."""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from rotalabs_truth.adapters.http import HttpAdapter, HttpAdapterConfig
from rotalabs_truth.core.exceptions import ConfigurationError
from rotalabs_truth.core.result import AdapterResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HTMLAdapterConfig(HttpAdapterConfig):
    """Configuration for HTMLAdapter.

    Attributes:
        regex: Pattern searched for anywhere in the page body.
        expected_match: Optional value the matched text must equal.
    """

    regex: str
    expected_match: Optional[str] = None


class HTMLAdapter(HttpAdapter[HTMLAdapterConfig]):
    """Answers True when a regex matches the fetched page.

    The matched value is the first capture group when the pattern has one,
    otherwise the whole match. With expected_match set, the answer is True
    only if the matched value equals it.
    """

    config_class = HTMLAdapterConfig

    def _validate(self, config: HTMLAdapterConfig) -> None:
        super()._validate(config)
        try:
            re.compile(config.regex)
        except re.error as exc:
            raise ConfigurationError(f"Invalid regex {config.regex!r}: {exc}") from exc

    def inspect(self, config: HTMLAdapterConfig, markup: str) -> AdapterResult:
        match = re.search(config.regex, markup)
        matched_value = None
        if match:
            matched_value = match.group(1) if match.re.groups else match.group(0)

        if matched_value is None:
            logger.debug(f"HTMLAdapter {config.id}: no match for {config.regex!r}")
            return AdapterResult.failure("No match found")

        answer = matched_value == config.expected_match if config.expected_match is not None else True
        return AdapterResult(answer=answer, metadata={"matched_value": matched_value})
