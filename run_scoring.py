#!/usr/bin/env python3
"""Send a crawl JSON file ({"crawlId": ..., "pages": [...]}) to the scoring API."""

import argparse
import json
import sys
import urllib.error
import urllib.request

DEFAULT_API = "http://localhost:8000"


def main() -> None:
    parser = argparse.ArgumentParser(description="Score a crawl via the API")
    parser.add_argument("crawl_file", help="Path to crawl JSON")
    parser.add_argument("--api", default=DEFAULT_API, help=f"API base URL (default {DEFAULT_API})")
    parser.add_argument("--queue", action="store_true", help="Enqueue a background job instead")
    args = parser.parse_args()

    try:
        with open(args.crawl_file, encoding="utf-8") as f:
            crawl = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Cannot read crawl file: {e}", file=sys.stderr)
        sys.exit(1)

    crawl_id = crawl.get("crawlId")
    if not crawl_id:
        print("Crawl file has no crawlId.", file=sys.stderr)
        sys.exit(1)

    suffix = "/score/jobs" if args.queue else "/score"
    endpoint = f"{args.api.rstrip('/')}/crawls/{crawl_id}{suffix}"
    body = json.dumps({"pages": crawl.get("pages", [])}).encode("utf-8")

    req = urllib.request.Request(
        endpoint,
        data=body,
        headers={"Content-Type": "application/json"},
        method="POST",
    )

    try:
        with urllib.request.urlopen(req, timeout=60) as resp:
            raw = resp.read().decode("utf-8", errors="replace")
            print(f"Status: {resp.status}")
            try:
                print(json.dumps(json.loads(raw), indent=2))
            except json.JSONDecodeError:
                print(raw)

    except urllib.error.HTTPError as e:
        err = e.read().decode("utf-8", errors="replace")
        print(f"HTTP Error {e.code}", file=sys.stderr)
        print(err, file=sys.stderr)
        sys.exit(1)

    except urllib.error.URLError as e:
        print(f"Request failed: {e.reason}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
