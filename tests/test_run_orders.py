from __future__ import annotations

import asyncio

import httpx

from order_browser.controller import BrowserConfig, OrderBrowser
from order_browser.data.order_fetcher import OrderFetcher
from order_browser.run_orders import HELP, handle_command, parse_args, run
from tests.conftest import ENDPOINT, make_payload


def test_parse_args_defaults():
    args = parse_args([])
    assert args.page == 1
    assert args.endpoint is None
    assert args.once is False


def test_parse_args_overrides():
    args = parse_args(["--endpoint", ENDPOINT, "--status", "open", "--page", "3", "--once"])
    assert (args.endpoint, args.status, args.page, args.once) == (ENDPOINT, "open", 3, True)


def test_run_once_prints_page(capsys):
    def handler(request):
        return httpx.Response(200, json=make_payload(2, total=2))

    async def scenario():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await run(BrowserConfig(endpoint=ENDPOINT), once=True, fetcher=OrderFetcher(client=client))

    summary = asyncio.run(scenario())
    out = capsys.readouterr().out
    assert "=== ORDERS status=all page=1/1 ===" in out
    assert "PEPECASH/XCP" in out
    assert summary["requests_completed"] == 1


def test_run_once_on_failure_prints_empty_list(capsys):
    async def scenario():
        async with httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(500))) as client:
            return await run(BrowserConfig(endpoint=ENDPOINT), once=True, fetcher=OrderFetcher(client=client))

    summary = asyncio.run(scenario())
    assert "No orders found." in capsys.readouterr().out
    assert summary["requests_failed"] == 1


def test_handle_command(capsys):
    def handler(request):
        return httpx.Response(200, json=make_payload(1, total=300))

    async def scenario():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            browser = OrderBrowser(BrowserConfig(endpoint=ENDPOINT), fetcher=OrderFetcher(client=client))
            await browser.load()
            await handle_command(browser, "3")
            third = browser.page_state.current_page
            await handle_command(browser, "p")
            previous = browser.page_state.current_page
            await handle_command(browser, "s expired")
            unknown = handle_command(browser, "zzz")
            return third, previous, browser.page_state, unknown

    third, previous, state, unknown = asyncio.run(scenario())
    assert (third, previous) == (3, 2)
    assert (state.status_filter, state.current_page) == ("expired", 1)
    assert unknown is None
    assert HELP in capsys.readouterr().out
