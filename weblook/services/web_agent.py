"""
Web agent: the default research collaborator.

Responsibility: For each search query, find candidate pages (DuckDuckGo via ddgs),
fetch them over one shared httpx session, extract readable text, and aggregate it
into a single context blob with visit accounting. Page fetches run concurrently
behind a semaphore; that concurrency never leaks past investigate().
"""

import asyncio
import logging
from typing import Any, Callable
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup
from ddgs import DDGS

from weblook.core.config import (
    AGENT_FETCH_TIMEOUT,
    AGENT_MAX_CHARS_PER_SOURCE,
    AGENT_MAX_CONCURRENCY,
    AGENT_MAX_CONTEXT_CHARS,
    AGENT_MIN_CONTENT_CHARS,
    AGENT_RESULTS_PER_QUERY,
    AGENT_USER_AGENT,
)
from weblook.schemas.research import ResearchReport
from weblook.services.research import ResearchResult
from weblook.services.text_processing import clean_text, truncate_text

logger = logging.getLogger(__name__)

SOURCE_SEPARATOR = "\n\n---\n\n"

# Page regions that are never article content
_NOISE_TAGS = ["script", "style", "nav", "header", "footer", "aside", "form", "noscript", "svg"]

SearchFn = Callable[[str, int], list[dict[str, Any]]]


def ddgs_search(query: str, max_results: int) -> list[dict[str, Any]]:
    """Blocking DuckDuckGo text search. Returns dicts with title, href, body."""
    with DDGS() as ddgs:
        return list(ddgs.text(query, max_results=max_results) or [])


def html_to_text(html: str) -> str:
    """Extract visible article-ish text from an HTML document."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(_NOISE_TAGS):
        tag.decompose()
    return clean_text(soup.get_text("\n"))


def _is_http_url(url: str) -> bool:
    try:
        parsed = urlparse((url or "").strip())
    except ValueError:
        return False
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


class WebAgent:
    """
    Research collaborator backed by web search and page scraping.

    Usage (normally via open_research_agent, which guarantees close())::

        agent = WebAgent()
        await agent.launch()
        result = await agent.investigate(["query one", "query two"])
        await agent.close()
    """

    def __init__(
        self,
        search: SearchFn | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        results_per_query: int = AGENT_RESULTS_PER_QUERY,
        max_concurrency: int = AGENT_MAX_CONCURRENCY,
        min_content_chars: int = AGENT_MIN_CONTENT_CHARS,
        max_chars_per_source: int = AGENT_MAX_CHARS_PER_SOURCE,
        max_context_chars: int = AGENT_MAX_CONTEXT_CHARS,
        fetch_timeout: float = AGENT_FETCH_TIMEOUT,
    ) -> None:
        self._search = search or ddgs_search
        self._transport = transport
        self.results_per_query = results_per_query
        self.max_concurrency = max(1, max_concurrency)
        self.min_content_chars = min_content_chars
        self.max_chars_per_source = max_chars_per_source
        self.max_context_chars = max_context_chars
        self.fetch_timeout = fetch_timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def is_open(self) -> bool:
        return self._client is not None

    async def launch(self) -> None:
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            timeout=self.fetch_timeout,
            transport=self._transport,
            follow_redirects=True,
            headers={"User-Agent": AGENT_USER_AGENT, "Accept": "text/html,text/plain;q=0.9,*/*;q=0.5"},
        )
        logger.info("[web_agent:launch] session opened")

    async def close(self) -> None:
        if self._client is None:
            return
        client, self._client = self._client, None
        await client.aclose()
        logger.info("[web_agent:close] session closed")

    async def investigate(self, queries: list[str]) -> ResearchResult:
        """Search every query, read every unique hit, and aggregate the extracted text."""
        client = self._client
        if client is None:
            raise RuntimeError("WebAgent.investigate() called before launch()")
        logger.info("[web_agent:investigate] IN  queries=%s", queries)

        urls: list[str] = []
        seen: set[str] = set()
        for query in queries:
            for url in await self._find_urls(query):
                if url not in seen:
                    seen.add(url)
                    urls.append(url)

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def read(url: str) -> str:
            async with semaphore:
                return await self._extract(client, url)

        texts = await asyncio.gather(*(read(u) for u in urls))

        blocks: list[str] = []
        successful = 0
        for url, text in zip(urls, texts):
            if len(text) < self.min_content_chars:
                continue
            successful += 1
            blocks.append(f"Source: {url}\n{truncate_text(text, self.max_chars_per_source)}")
        context = truncate_text(SOURCE_SEPARATOR.join(blocks), self.max_context_chars)
        report = ResearchReport(
            total_visited=len(urls),
            successful=successful,
            failed=len(urls) - successful,
        )
        logger.info(
            "[web_agent:investigate] OUT visited=%d successful=%d failed=%d context_len=%d",
            report.total_visited, report.successful, report.failed, len(context),
        )
        return ResearchResult(context=context, report=report)

    async def _find_urls(self, query: str) -> list[str]:
        try:
            hits = await asyncio.to_thread(self._search, query, self.results_per_query)
        except Exception as e:
            logger.warning("[web_agent:search] query=%r failed: %s", query, e)
            return []
        urls = [(h.get("href") or "").strip() for h in hits or [] if isinstance(h, dict)]
        urls = [u for u in urls if _is_http_url(u)][: self.results_per_query]
        logger.info("[web_agent:search] query=%r urls=%s", query, urls)
        return urls

    async def _extract(self, client: httpx.AsyncClient, url: str) -> str:
        """Fetch one page and return its cleaned text, or "" when nothing usable came back."""
        try:
            response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.warning("[web_agent:extract] url=%s request failed: %s", url, e)
            return ""
        if response.status_code != 200:
            logger.warning("[web_agent:extract] url=%s status=%s", url, response.status_code)
            return ""
        content_type = response.headers.get("content-type", "").lower()
        if "html" in content_type:
            text = html_to_text(response.text)
        elif content_type.startswith("text/plain"):
            text = clean_text(response.text)
        else:
            logger.info("[web_agent:extract] url=%s skipped content_type=%r", url, content_type)
            return ""
        logger.info("[web_agent:extract] url=%s text_len=%d", url, len(text))
        return text
