"""Capture LinkedIn session cookies for the job link fetcher.

Usage:
    python scripts/extract_cookies.py [--output config/linkedin_cookies.json]

Opens a Chromium window on the LinkedIn login page. Log in manually, then
press Enter in the terminal. The cookies are written as a JSON array, the
format BrowserSession loads.
"""

import argparse
import json
from pathlib import Path

from patchright.sync_api import sync_playwright

LOGIN_URL = "https://www.linkedin.com/login"


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--output", default="config/linkedin_cookies.json")
    args = parser.parse_args()
    output = Path(args.output)

    with sync_playwright() as p:
        browser = p.chromium.launch(headless=False)
        context = browser.new_context()
        page = context.new_page()
        page.goto(LOGIN_URL)

        input("\n>>> Log in to LinkedIn, then press Enter here to save cookies...")

        cookies = context.cookies()
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json.dumps(cookies, indent=2))
        print(f"Saved {len(cookies)} cookies to {output}")

        browser.close()


if __name__ == "__main__":
    main()
