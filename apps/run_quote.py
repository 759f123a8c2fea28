#!/usr/bin/env python3
"""Quote one exact-in swap against a JSON market snapshot.

Optionally refreshes oracle prices from a Pyth Hermes endpoint first
(`--hermes`, with `--feed ORACLE_ACCOUNT=FEED_ID` mappings). The endpoint
defaults to $OXEDIUM_HERMES_URL, else the public Hermes service.
"""

from __future__ import annotations

import argparse
import sys
from typing import Dict, List, Optional

from oxedium_amm import MarketSnapshot, OxediumAmm, QuoteParams, SwapMathError
from oxedium_amm.core import fmt_units
from oxedium_amm.oracle import HermesClient, normalize_feed_id


def parse_feeds(raw: List[str]) -> Dict[str, str]:
    feeds: Dict[str, str] = {}
    for item in raw:
        account, sep, feed_id = item.partition("=")
        if not sep or not account or not feed_id:
            raise SystemExit(f"--feed expects ORACLE_ACCOUNT=FEED_ID, got {item!r}")
        feeds[account] = feed_id
    return feeds


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Quote a swap against an Oxedium snapshot.")
    parser.add_argument("--snapshot", required=True, help="Path to market snapshot JSON")
    parser.add_argument("--in-mint", required=True, help="Input token mint")
    parser.add_argument("--out-mint", required=True, help="Output token mint")
    parser.add_argument("--amount", type=int, required=True, help="Input amount in smallest units")
    parser.add_argument("--partner-fee-bps", type=int, default=0)
    parser.add_argument("--hermes", action="store_true", help="Refresh prices from Pyth Hermes before quoting")
    parser.add_argument("--hermes-url", default=None, help="Override the Hermes base URL")
    parser.add_argument("--feed", action="append", default=[], help="ORACLE_ACCOUNT=FEED_ID (repeatable)")
    parser.add_argument("--timeout", type=float, default=10.0)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    snapshot = MarketSnapshot.load_json(args.snapshot)

    if args.hermes:
        feeds = parse_feeds(args.feed)
        if not feeds:
            raise SystemExit("--hermes requires at least one --feed mapping")
        client = HermesClient(args.hermes_url, timeout=args.timeout)
        readings = client.latest_prices(feeds.values())
        snapshot = snapshot.with_prices({acc: readings[normalize_feed_id(fid)] for acc, fid in feeds.items()})

    amm = OxediumAmm(key="cli")
    amm.update(snapshot)
    params = QuoteParams(
        amount=args.amount,
        input_mint=args.in_mint,
        output_mint=args.out_mint,
        partner_fee_bps=args.partner_fee_bps,
    )
    try:
        q = amm.quote(params)
    except SwapMathError as e:
        print(f"Quote failed: {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    dec_out = snapshot.decimals[args.out_mint]
    print(f"in_amount  = {q.in_amount}")
    print(f"out_amount = {q.out_amount} ({fmt_units(q.out_amount, dec_out, places=dec_out)})")
    print(f"fee_amount = {q.fee_amount} {q.fee_mint}")
    print(f"fee_pct    = {q.fee_pct}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
