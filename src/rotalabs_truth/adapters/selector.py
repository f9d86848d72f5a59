"""CSS selector extraction from fetched markup.

Pages are parsed with BeautifulSoup's built-in ``html.parser``; selectors
are resolved through ``soup.select``.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup

from rotalabs_truth.adapters.http import HttpAdapter, HttpAdapterConfig
from rotalabs_truth.core.exceptions import ConfigurationError
from rotalabs_truth.core.result import AdapterResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectorAdapterConfig(HttpAdapterConfig):
    """Configuration for SelectorAdapter.

    Attributes:
        selector: CSS selector applied to the parsed page.
        expected_value: Optional value the extracted text must equal.
        extract_attribute: Attribute to read from the first matched element
            instead of the text content.
    """

    selector: str
    expected_value: Optional[str] = None
    extract_attribute: Optional[str] = None


class SelectorAdapter(HttpAdapter[SelectorAdapterConfig]):
    """Answers True when a CSS selector yields a value on the fetched page.

    In text mode the text of every matched element is concatenated and
    stripped. In attribute mode the attribute of the first matched element
    is used. An empty value counts as no match.
    """

    config_class = SelectorAdapterConfig

    def _validate(self, config: SelectorAdapterConfig) -> None:
        super()._validate(config)
        if not config.selector or not config.selector.strip():
            raise ConfigurationError("SelectorAdapter requires a non-empty selector")

    def inspect(self, config: SelectorAdapterConfig, markup: str) -> AdapterResult:
        try:
            soup = BeautifulSoup(markup, "html.parser")
            elements = soup.select(config.selector)
        except Exception as e:
            logger.warning(f"SelectorAdapter {config.id}: failed to apply {config.selector!r}: {e}")
            return AdapterResult.failure(f"Failed to apply selector: {e}")

        matched_value = self._extract(elements, config.extract_attribute)
        if not matched_value:
            logger.debug(f"SelectorAdapter {config.id}: no match for {config.selector!r}")
            return AdapterResult.failure("No match found")

        answer = matched_value == config.expected_value if config.expected_value is not None else True
        return AdapterResult(
            answer=answer,
            metadata={
                "matched_value": matched_value,
                "extracted_attribute": config.extract_attribute,
            },
        )

    @staticmethod
    def _extract(elements, attribute: Optional[str]) -> Optional[str]:
        if not elements:
            return None

        if attribute:
            value = elements[0].get(attribute)
            # multi-valued attributes such as class come back as lists
            if isinstance(value, list):
                value = " ".join(value)
            return value

        return "".join(element.get_text() for element in elements).strip()
