"""
Unit tests for the default web agent.

Search is a fake callable and pages are served by httpx.MockTransport, so no
DuckDuckGo or real sites are hit.
"""

import asyncio

import httpx
import pytest

from weblook.services.web_agent import SOURCE_SEPARATOR, WebAgent, html_to_text

PARIS_HTML = """
<html><head><title>Paris</title><style>body { color: red; }</style></head>
<body>
  <nav>Home | About | Contact</nav>
  <script>var tracking = "do not read";</script>
  <article>
    <h1>Paris</h1>
    <p>Paris is the capital and most populous city of France.</p>
    <p>It has been one of the major centres of finance, diplomacy, commerce and science in Europe.</p>
  </article>
  <footer>Copyright notice</footer>
</body></html>
"""

PAGES = {
    "https://a.test/paris": lambda: httpx.Response(200, html=PARIS_HTML),
    "https://b.test/missing": lambda: httpx.Response(404, text="not found"),
    "https://c.test/short": lambda: httpx.Response(200, html="<html><body><p>Too short.</p></body></html>"),
    "https://d.test/file.pdf": lambda: httpx.Response(
        200, content=b"%PDF-1.4", headers={"content-type": "application/pdf"}
    ),
    "https://e.test/notes.txt": lambda: httpx.Response(
        200,
        text="Paris facts.\nParis facts.\nThe Seine river flows through Paris and divides it into two banks.",
    ),
}


def _serve(request: httpx.Request) -> httpx.Response:
    page = PAGES.get(str(request.url))
    return page() if page else httpx.Response(404)


def _search_from(results: dict[str, list[str]]):
    def search(query: str, max_results: int) -> list[dict]:
        if query not in results:
            raise RuntimeError("rate limited")
        return [{"title": u, "href": u, "body": ""} for u in results[query]][:max_results]

    return search


def _agent(results: dict[str, list[str]], **kwargs) -> WebAgent:
    kwargs.setdefault("min_content_chars", 50)
    return WebAgent(search=_search_from(results), transport=httpx.MockTransport(_serve), **kwargs)


async def _run(agent: WebAgent, queries: list[str]):
    await agent.launch()
    try:
        return await agent.investigate(queries)
    finally:
        await agent.close()


class TestHtmlToText:
    def test_drops_script_style_and_chrome(self) -> None:
        text = html_to_text(PARIS_HTML)
        assert "Paris is the capital and most populous city of France." in text
        assert "tracking" not in text
        assert "color: red" not in text
        assert "Home | About" not in text
        assert "Copyright" not in text


class TestInvestigate:
    def test_counts_visits_successes_and_failures(self) -> None:
        agent = _agent({
            "capital of France": ["https://a.test/paris", "https://b.test/missing"],
            "Paris facts": ["https://a.test/paris", "https://c.test/short", "https://d.test/file.pdf"],
        }, results_per_query=3)
        result = asyncio.run(_run(agent, ["capital of France", "Paris facts"]))
        # a.test/paris is found twice but visited once
        assert result.report.total_visited == 4
        assert result.report.successful == 1
        assert result.report.failed == 3
        assert result.context.startswith("Source: https://a.test/paris\n")
        assert "capital and most populous city of France" in result.context

    def test_plain_text_pages_are_used_and_blocks_are_separated(self) -> None:
        agent = _agent({"q1": ["https://a.test/paris"], "q2": ["https://e.test/notes.txt"]})
        result = asyncio.run(_run(agent, ["q1", "q2"]))
        blocks = result.context.split(SOURCE_SEPARATOR)
        assert [b.splitlines()[0] for b in blocks] == [
            "Source: https://a.test/paris",
            "Source: https://e.test/notes.txt",
        ]
        assert blocks[1].count("Paris facts.") == 1

    def test_failed_search_skips_only_that_query(self) -> None:
        agent = _agent({"good": ["https://a.test/paris"]})
        result = asyncio.run(_run(agent, ["broken", "good"]))
        assert result.report.total_visited == 1
        assert result.report.successful == 1

    def test_no_usable_pages_gives_empty_context(self) -> None:
        agent = _agent({"q": ["https://b.test/missing", "https://c.test/short"]})
        result = asyncio.run(_run(agent, ["q"]))
        assert result.context == ""
        assert result.report.failed == 2

    def test_results_per_query_limit_and_non_http_links(self) -> None:
        agent = _agent(
            {"q": ["ftp://x.test/file", "https://a.test/paris", "https://e.test/notes.txt"]},
            results_per_query=2,
        )
        result = asyncio.run(_run(agent, ["q"]))
        # only the first two hits are considered; the ftp link is discarded
        assert result.report.total_visited == 1

    def test_bad_host_counts_as_one_failed_page(self) -> None:
        agent = _agent({"q": ["https://a.test/paris", "https://xn--zz.com/page"]})
        result = asyncio.run(_run(agent, ["q"]))
        assert result.report.total_visited == 2
        assert result.report.successful == 1
        assert result.report.failed == 1
        assert "capital and most populous city of France" in result.context

    def test_unparseable_href_is_dropped(self) -> None:
        agent = _agent({"q": ["https://[::1/x", "https://a.test/paris"]})
        result = asyncio.run(_run(agent, ["q"]))
        assert result.report.total_visited == 1
        assert result.report.successful == 1

    def test_context_is_capped(self) -> None:
        agent = _agent({"q": ["https://a.test/paris", "https://e.test/notes.txt"]}, max_context_chars=80)
        result = asyncio.run(_run(agent, ["q"]))
        assert 0 < len(result.context) <= 80


class TestLifecycle:
    def test_investigate_before_launch_raises(self) -> None:
        agent = _agent({"q": []})
        with pytest.raises(RuntimeError):
            asyncio.run(agent.investigate(["q"]))

    def test_close_is_idempotent(self) -> None:
        agent = _agent({"q": []})

        async def body() -> None:
            await agent.launch()
            assert agent.is_open
            await agent.close()
            await agent.close()

        asyncio.run(body())
        assert not agent.is_open
