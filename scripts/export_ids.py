#!/usr/bin/env python3
"""
Export every document id of an index (optionally filtered) via the API's search-after endpoint.
Prints one id per line; the termination reason goes to stderr so a stalled run is visible.

  python scripts/export_ids.py --index flights > ids.txt
  python scripts/export_ids.py --index flights --query '{"term": {"airline": "LH"}}' --page-size 5000
"""

import argparse
import json
import sys

import httpx

API_BASE = "http://localhost:8000/api/v1"


def main():
    ap = argparse.ArgumentParser(description="Export all document ids of an index")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    ap.add_argument("--index", default="flights", help="Index to walk")
    ap.add_argument("--query", default=None, help="Elasticsearch query DSL as JSON")
    ap.add_argument("--page-size", type=int, default=1000, help="Documents per page (max 10000)")
    args = ap.parse_args()

    body = {"page_size": args.page_size}
    if args.query:
        body["query"] = json.loads(args.query)

    # Walking a large index issues many sequential searches server-side
    with httpx.Client(base_url=args.base_url, timeout=300.0) as client:
        r = client.post(f"/documents/{args.index}/_ids", json=body)
    if r.status_code != 200:
        print(f"Failed to export ids: {r.status_code} {r.text[:200]}", file=sys.stderr)
        sys.exit(1)

    data = r.json()
    for doc_id in data["ids"]:
        print(doc_id)
    print(
        f"{data['count']} ids in {data['fetches']} pages (termination: {data['termination']})",
        file=sys.stderr,
    )
    if data["termination"] == "stalled":
        sys.exit(2)


if __name__ == "__main__":
    main()
