#!/usr/bin/env python3

"""Simple CLI to send a message to the local /v1/chat endpoint."""

import argparse
import os
import sys
from time import perf_counter

import requests

DEFAULT_URL = os.getenv("OPS_ASSISTANT_URL", "http://localhost:3000/v1/chat")


def main() -> int:
    """Entry point to this tool."""
    parser = argparse.ArgumentParser(
        description="Send a message to a running Ops Assistant service."
    )
    parser.add_argument(
        "--message",
        default="help",
        help="Operator message text. Defaults to 'help'.",
    )
    parser.add_argument(
        "--session-id",
        default=None,
        help="Session identifier; the service generates one when omitted.",
    )
    parser.add_argument(
        "--url",
        default=DEFAULT_URL,
        help=f"Endpoint URL. Defaults to env OPS_ASSISTANT_URL or {DEFAULT_URL!r}.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=60,
        help="Request timeout in seconds (default: 60).",
    )
    args = parser.parse_args()

    payload = {"message": args.message}
    if args.session_id:
        payload["session_id"] = args.session_id

    t0 = perf_counter()
    try:
        resp = requests.post(url=args.url, json=payload, timeout=args.timeout)
        elapsed = perf_counter() - t0
        resp.raise_for_status()
    except requests.exceptions.RequestException as e:
        elapsed = perf_counter() - t0
        print(f"Request failed after {elapsed:.2f}s: {e}", file=sys.stderr)
        return 1

    try:
        obj = resp.json()
    except ValueError:
        print("Server response is not valid JSON.", file=sys.stderr)
        print(resp.text[:1000], file=sys.stderr)
        return 2

    if "response" not in obj:
        print("JSON is missing 'response' field:", file=sys.stderr)
        print(obj, file=sys.stderr)
        return 3

    print(obj["response"])
    print(f"Session {obj.get('session_id')}, response time {elapsed:.2f} seconds")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
