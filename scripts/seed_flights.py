#!/usr/bin/env python3
"""
Seed script: indexes sample flight records via the API (no direct Elasticsearch access).
Run: API must be running and reachable.
  python scripts/seed_flights.py
  python scripts/seed_flights.py --count 500 --index flights
"""

import argparse
import random
import sys

import httpx

API_BASE = "http://localhost:8000/api/v1"

AIRPORTS = ["FRA", "MUC", "JFK", "SFO", "LHR", "CDG", "ORD", "DXB", "SIN", "HND"]
AIRLINES = ["LH", "UA", "BA", "AF", "EK", "SQ", "NH"]


def random_flight(i: int) -> dict:
    origin, destination = random.sample(AIRPORTS, 2)
    return {
        "noseNumber": f"D-A{i:04d}",
        "airline": random.choice(AIRLINES),
        "flightNumber": random.randint(1, 9999),
        "origin": origin,
        "destination": destination,
    }


def main():
    ap = argparse.ArgumentParser(description="Index sample flights through the API")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    ap.add_argument("--index", default="flights", help="Target index")
    ap.add_argument("--count", type=int, default=100, help="Number of flights")
    args = ap.parse_args()

    created = 0
    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        for i in range(1, args.count + 1):
            doc_id = f"flight-{i:05d}"
            r = client.put(f"/documents/{args.index}/{doc_id}", json=random_flight(i))
            if r.status_code != 200:
                print(f"Failed to index {doc_id}: {r.status_code} {r.text[:200]}")
                sys.exit(1)
            if r.json()["result"] == "created":
                created += 1

    print(f"Indexed {args.count} flights into '{args.index}' ({created} new).")


if __name__ == "__main__":
    main()
