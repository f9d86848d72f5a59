"""Tests for HTTP-backed adapters in rotalabs-truth.

Tests cover:
- HTMLAdapter regex matching and expected values
- SelectorAdapter text and attribute extraction
- Fetch failures encoded as false results
- HTTP client ownership and dispose
- A fetched value driving a date check through a chain

All requests are served by httpx.MockTransport; no network access.
"""

import httpx
import pytest

from rotalabs_truth.adapters.date import DateAdapter, DateAdapterConfig
from rotalabs_truth.adapters.html import HTMLAdapter, HTMLAdapterConfig
from rotalabs_truth.adapters.http import FetchError
from rotalabs_truth.adapters.selector import SelectorAdapter, SelectorAdapterConfig
from rotalabs_truth.core.chain import ChainedAdapter, ChainedAdapterConfig
from rotalabs_truth.core.exceptions import ConfigurationError
from rotalabs_truth.transforms import matched_value_as_date

URL = "https://example.com/person"

PAGE = """
<html>
  <body>
    <h1 class="title main">Greg Davies</h1>
    <span class="bday">1968-10-14</span>
    <ul>
      <li class="item">one</li>
      <li class="item">two</li>
    </ul>
    <a id="home" href="https://example.com/">Home</a>
  </body>
</html>
"""


def html_config(regex, **kwargs):
    return HTMLAdapterConfig(id="html", name="HTML", url=URL, regex=regex, **kwargs)


def selector_config(selector, **kwargs):
    return SelectorAdapterConfig(id="css", name="CSS", url=URL, selector=selector, **kwargs)


class TestHTMLAdapter:
    """Tests for HTMLAdapter."""

    @pytest.mark.asyncio
    async def test_capture_group(self, mock_client):
        """Test that the first capture group is the matched value."""
        adapter = HTMLAdapter(client=mock_client(PAGE))
        await adapter.configure(html_config(r'<span class="bday">(.*?)</span>'))

        result = await adapter.evaluate()

        assert result.answer is True
        assert result.metadata == {"matched_value": "1968-10-14"}

    @pytest.mark.asyncio
    async def test_pattern_without_groups(self, mock_client):
        """Test that the whole match is used when there is no group."""
        adapter = HTMLAdapter(client=mock_client(PAGE))
        await adapter.configure(html_config(r"\d{4}-\d{2}-\d{2}"))

        result = await adapter.evaluate()

        assert result.metadata["matched_value"] == "1968-10-14"

    @pytest.mark.asyncio
    async def test_expected_match(self, mock_client):
        """Test comparing the matched value to an expected value."""
        adapter = HTMLAdapter(client=mock_client(PAGE))

        await adapter.configure(html_config(r"<h1[^>]*>(.*?)</h1>", expected_match="Greg Davies"))
        assert (await adapter.evaluate()).answer is True

        await adapter.configure(html_config(r"<h1[^>]*>(.*?)</h1>", expected_match="Someone Else"))
        result = await adapter.evaluate()
        assert result.answer is False
        assert result.metadata["matched_value"] == "Greg Davies"

    @pytest.mark.asyncio
    async def test_no_match(self, mock_client):
        """Test that a missing match is a false result, not an error."""
        adapter = HTMLAdapter(client=mock_client(PAGE))
        await adapter.configure(html_config(r'<span class="deathday">(.*?)</span>'))

        result = await adapter.evaluate()

        assert result.answer is False
        assert result.metadata == {"error": "No match found"}

    @pytest.mark.asyncio
    async def test_http_error_status(self, mock_client):
        """Test that an HTTP error status becomes a false result."""
        adapter = HTMLAdapter(client=mock_client("not found", status_code=404))
        await adapter.configure(html_config(r"(.*)"))

        result = await adapter.evaluate()

        assert result.answer is False
        assert result.error == "HTTP error: status 404"

    @pytest.mark.asyncio
    async def test_network_error(self, mock_client):
        """Test that a transport failure becomes a false result."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        adapter = HTMLAdapter(client=mock_client(handler))
        await adapter.configure(html_config(r"(.*)"))

        result = await adapter.evaluate()

        assert result.answer is False
        assert "connection refused" in result.error

    @pytest.mark.asyncio
    async def test_timeout(self, mock_client):
        """Test that a timeout becomes a false result."""
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        adapter = HTMLAdapter(client=mock_client(handler))
        await adapter.configure(html_config(r"(.*)", timeout=250))

        result = await adapter.evaluate()

        assert result.answer is False
        assert result.error == "Request timed out after 250ms"

    @pytest.mark.asyncio
    async def test_invalid_url_rejected_at_configure(self, mock_client):
        """Test that a URL httpx cannot parse is a configuration error."""
        adapter = HTMLAdapter(client=mock_client(PAGE))

        with pytest.raises(ConfigurationError, match="Invalid url"):
            await adapter.configure(
                HTMLAdapterConfig(id="html", name="HTML", url="http://" + "a" * 70000, regex="(.*)")
            )

    @pytest.mark.asyncio
    async def test_invalid_url_during_fetch(self, mock_client):
        """Test that an invalid URL at request time becomes a false result."""
        def handler(request):
            raise httpx.InvalidURL("URL too long")

        adapter = HTMLAdapter(client=mock_client(handler))
        await adapter.configure(html_config(r"(.*)"))

        result = await adapter.evaluate()

        assert result.answer is False
        assert result.error == "Invalid url: URL too long"

    @pytest.mark.asyncio
    async def test_fetch_raises_fetch_error_for_invalid_url(self, mock_client):
        """Test that fetch() wraps httpx's invalid URL error."""
        adapter = HTMLAdapter(client=mock_client(PAGE))

        with pytest.raises(FetchError, match="Invalid url"):
            await adapter.fetch("http://" + "a" * 70000)

    @pytest.mark.asyncio
    async def test_requests_configured_url(self, mock_client):
        """Test that the configured URL is fetched."""
        requested = []

        def handler(request):
            requested.append(str(request.url))
            return httpx.Response(200, text=PAGE)

        adapter = HTMLAdapter(client=mock_client(handler))
        await adapter.configure(html_config(r"(Home)"))
        await adapter.evaluate()

        assert requested == [URL]

    @pytest.mark.asyncio
    async def test_invalid_regex(self):
        """Test that an invalid pattern fails at configure time."""
        adapter = HTMLAdapter()

        with pytest.raises(ConfigurationError, match="Invalid regex"):
            await adapter.configure(html_config(r"(unclosed"))

    @pytest.mark.asyncio
    async def test_requires_url(self):
        """Test that an empty URL fails at configure time."""
        adapter = HTMLAdapter()

        with pytest.raises(ConfigurationError, match="requires a url"):
            await adapter.configure(HTMLAdapterConfig(id="html", name="HTML", url="", regex="x"))

    @pytest.mark.asyncio
    async def test_rejects_non_positive_timeout(self):
        """Test that the timeout must be positive."""
        adapter = HTMLAdapter()

        with pytest.raises(ConfigurationError, match="timeout must be positive"):
            await adapter.configure(html_config("x", timeout=0))


class TestSelectorAdapter:
    """Tests for SelectorAdapter."""

    @pytest.mark.asyncio
    async def test_text_content(self, mock_client):
        """Test extracting trimmed text content."""
        adapter = SelectorAdapter(client=mock_client(PAGE))
        await adapter.configure(selector_config("span.bday"))

        result = await adapter.evaluate()

        assert result.answer is True
        assert result.metadata == {"matched_value": "1968-10-14", "extracted_attribute": None}

    @pytest.mark.asyncio
    async def test_text_of_multiple_elements(self, mock_client):
        """Test that text from every matched element is concatenated."""
        adapter = SelectorAdapter(client=mock_client(PAGE))
        await adapter.configure(selector_config("li.item"))

        result = await adapter.evaluate()

        assert result.metadata["matched_value"] == "onetwo"

    @pytest.mark.asyncio
    async def test_attribute(self, mock_client):
        """Test extracting an attribute from the first matched element."""
        adapter = SelectorAdapter(client=mock_client(PAGE))
        await adapter.configure(selector_config("a#home", extract_attribute="href"))

        result = await adapter.evaluate()

        assert result.answer is True
        assert result.metadata == {"matched_value": "https://example.com/", "extracted_attribute": "href"}

    @pytest.mark.asyncio
    async def test_multi_valued_attribute(self, mock_client):
        """Test that class attributes are joined with spaces."""
        adapter = SelectorAdapter(client=mock_client(PAGE))
        await adapter.configure(selector_config("h1", extract_attribute="class"))

        result = await adapter.evaluate()

        assert result.metadata["matched_value"] == "title main"

    @pytest.mark.asyncio
    async def test_expected_value(self, mock_client):
        """Test comparing the extracted value to an expected value."""
        adapter = SelectorAdapter(client=mock_client(PAGE))

        await adapter.configure(selector_config("h1", expected_value="Greg Davies"))
        assert (await adapter.evaluate()).answer is True

        await adapter.configure(selector_config("h1", expected_value="Someone Else"))
        assert (await adapter.evaluate()).answer is False

    @pytest.mark.asyncio
    async def test_no_match(self, mock_client):
        """Test that an unmatched selector is a false result."""
        adapter = SelectorAdapter(client=mock_client(PAGE))
        await adapter.configure(selector_config("div.missing"))

        result = await adapter.evaluate()

        assert result.answer is False
        assert result.error == "No match found"

    @pytest.mark.asyncio
    async def test_missing_attribute(self, mock_client):
        """Test that a missing attribute is a false result."""
        adapter = SelectorAdapter(client=mock_client(PAGE))
        await adapter.configure(selector_config("span.bday", extract_attribute="data-missing"))

        result = await adapter.evaluate()

        assert result.error == "No match found"

    @pytest.mark.asyncio
    async def test_invalid_selector(self, mock_client):
        """Test that a selector the parser rejects is a false result."""
        adapter = SelectorAdapter(client=mock_client(PAGE))
        await adapter.configure(selector_config("li[[["))

        result = await adapter.evaluate()

        assert result.answer is False
        assert result.error.startswith("Failed to apply selector")

    @pytest.mark.asyncio
    async def test_http_error(self, mock_client):
        """Test that fetch failures become false results."""
        adapter = SelectorAdapter(client=mock_client("boom", status_code=500))
        await adapter.configure(selector_config("h1"))

        result = await adapter.evaluate()

        assert result.error == "HTTP error: status 500"

    @pytest.mark.asyncio
    async def test_requires_selector(self):
        """Test that a blank selector fails at configure time."""
        adapter = SelectorAdapter()

        with pytest.raises(ConfigurationError, match="non-empty selector"):
            await adapter.configure(selector_config("  "))


class TestClientOwnership:
    """Tests for HTTP client lifecycle."""

    @pytest.mark.asyncio
    async def test_injected_client_not_closed(self, mock_client):
        """Test that dispose leaves a borrowed client open."""
        client = mock_client(PAGE)
        adapter = HTMLAdapter(client=client)

        await adapter.dispose()

        assert not client.is_closed
        await client.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        """Test that dispose closes a client the adapter created."""
        adapter = SelectorAdapter()
        client = adapter._get_client()

        await adapter.dispose()
        await adapter.dispose()

        assert client.is_closed
        assert adapter._client is None


class TestFetchedDateChain:
    """Tests for a scraped date reconfiguring a date check."""

    def build_chain(self, mock_client, fixed_clock, now):
        config = ChainedAdapterConfig(
            id="birthday",
            name="Birthday today",
            source_adapter=HTMLAdapter(client=mock_client(PAGE)),
            target_adapter=DateAdapter(clock=fixed_clock(now)),
            source_config=html_config(r'<span class="bday">(.*?)</span>'),
            target_config=DateAdapterConfig(id="target-date", name="Target Date", target_date="2000-01-01"),
            transform_result=matched_value_as_date,
        )
        return ChainedAdapter(), config

    @pytest.mark.asyncio
    async def test_birthday_today(self, mock_client, fixed_clock):
        """Test that the scraped birthday matches on its anniversary."""
        chain, config = self.build_chain(mock_client, fixed_clock, "2024-10-14T09:00:00+00:00")
        await chain.configure(config)

        result = await chain.evaluate()

        assert result.answer is True
        assert result.metadata["source_result"].metadata["matched_value"] == "1968-10-14"
        assert config.target_adapter.config.target_date == "1968-10-14"
        assert config.target_adapter.config.recurring_yearly is True

    @pytest.mark.asyncio
    async def test_birthday_not_today(self, mock_client, fixed_clock):
        """Test that other days answer false."""
        chain, config = self.build_chain(mock_client, fixed_clock, "2024-10-15T09:00:00+00:00")
        await chain.configure(config)

        result = await chain.evaluate()

        assert result.answer is False
        assert result.metadata["target_result"].answer is False

    @pytest.mark.asyncio
    async def test_unparsable_birthday_raises(self, mock_client, fixed_clock):
        """Test that a bad scraped value is a wiring error, not a false answer."""
        config = ChainedAdapterConfig(
            id="birthday",
            name="Birthday today",
            source_adapter=HTMLAdapter(client=mock_client("<span class=\"bday\">sometime</span>")),
            target_adapter=DateAdapter(clock=fixed_clock("2024-10-14T09:00:00+00:00")),
            source_config=html_config(r'<span class="bday">(.*?)</span>'),
            target_config=DateAdapterConfig(id="target-date", name="Target Date", target_date="2000-01-01"),
            transform_result=matched_value_as_date,
        )
        chain = ChainedAdapter()
        await chain.configure(config)

        with pytest.raises(ValueError, match="Invalid target_date"):
            await chain.evaluate()
