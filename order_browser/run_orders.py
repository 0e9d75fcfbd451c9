"""Entry point for browsing the order list from a terminal."""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Optional, Sequence

from order_browser.controller import DEFAULT_SETTINGS_PATH, BrowserConfig, OrderBrowser
from order_browser.data.order_fetcher import OrderFetcher
from order_browser.logging.nav_log import set_log_level

HELP = "commands: n=next  p=previous  <number>=page  s <status>=filter  r=refresh  q=quit"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Browse a paginated order list.")
    parser.add_argument("--config", type=Path, default=DEFAULT_SETTINGS_PATH, help="settings YAML file")
    parser.add_argument("--endpoint", help="orders endpoint URL")
    parser.add_argument("--status", help="status filter, 'all' for none")
    parser.add_argument("--context", help="'trade' links rows to their market")
    parser.add_argument("--page", type=int, default=1, help="1-indexed page to open")
    parser.add_argument("--once", action="store_true", help="print one page and exit")
    return parser.parse_args(argv)


def print_page(browser: OrderBrowser) -> None:
    state = browser.page_state
    print(f"=== ORDERS status={state.status_filter} page={state.current_page}/{state.total_pages} ===")
    for line in browser.render():
        print(line)


def handle_command(browser: OrderBrowser, command: str) -> Optional[asyncio.Task]:
    """Turn one input line into a navigation; returns the scheduled fetch if any."""
    command = command.strip()
    if command == "n":
        return browser.next_page()
    if command == "p":
        return browser.previous_page()
    if command == "r":
        return browser.refresh()
    if command.startswith("s "):
        return browser.set_status(command[2:].strip())
    if command.isdigit():
        return browser.go_to_page(int(command))
    print(HELP)
    return None


async def run(
    config: BrowserConfig,
    page: int = 1,
    once: bool = False,
    fetcher: Optional[OrderFetcher] = None,
) -> dict[str, int | str]:
    browser = OrderBrowser(config, fetcher=fetcher, page=page)
    loop = asyncio.get_running_loop()
    try:
        await browser.load()
        print_page(browser)
        if once:
            return browser.summary()

        print(HELP)
        while True:
            # stdin is read off-loop so pending fetches keep running
            command = await loop.run_in_executor(None, input, "> ")
            if command.strip() == "q":
                break
            task = handle_command(browser, command)
            if task is not None:
                await task
                print_page(browser)
    except (EOFError, KeyboardInterrupt):
        print("\nShutdown initiated...")
    finally:
        await browser.shutdown()
    return browser.summary()


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    config = BrowserConfig.from_yaml(args.config, endpoint=args.endpoint, status=args.status, context=args.context)
    set_log_level(config.log_level)

    metrics = asyncio.run(run(config, page=args.page, once=args.once))
    print("=== RUN SUMMARY ===")
    for k, v in metrics.items():
        print(f"{k}: {v}")


if __name__ == "__main__":
    main()
