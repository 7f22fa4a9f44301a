#!/usr/bin/env python3
"""
Example: decode NMEA sentences given on the command line.

Run with:
    python examples/decode_nmea.py '!AIVDM,1,1,,A,85M:Ih1KmPAU6jAs85`03cJm,0*6A'
    python examples/decode_nmea.py --json \\
        '!AIVDM,2,1,3,B,55P5TL01VIaAL@7WKO@mBplU@<PDhh000000001S;AJ::4A80?4i@E53,0*3E' \\
        '!AIVDM,2,2,3,B,1@0000000000000,2*55'
"""

import argparse
import logging
from collections import Counter

from nmea_ais import (
    DEFAULT_MAX_PENDING_FRAGMENTS,
    DEFAULT_MAX_STATIC_ENTRIES,
    Incomplete,
    NmeaParser,
    ParseError,
)
from nmea_ais.json_output import to_json


def main():
    parser = argparse.ArgumentParser(description="NMEA 0183 / AIS sentence decoder")
    parser.add_argument("sentences", nargs="+", help="Sentences to decode, in order")
    parser.add_argument("--json", action="store_true", help="Print one JSON document per message")
    parser.add_argument("--verbose", action="store_true", help="Show parser log messages")
    parser.add_argument(
        "--max-pending-fragments",
        type=int,
        default=DEFAULT_MAX_PENDING_FRAGMENTS,
        help="Fragments kept while waiting for their counterpart",
    )
    parser.add_argument(
        "--max-static-entries",
        type=int,
        default=DEFAULT_MAX_STATIC_ENTRIES,
        help="Type 24 halves kept while waiting for the other half",
    )
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    nmea = NmeaParser(args.max_pending_fragments, args.max_static_entries)
    stats = Counter()

    for sentence in args.sentences:
        try:
            result = nmea.parse_with_tags(sentence)
        except ParseError as e:
            stats[type(e).__name__] += 1
            print(f"Error: {e}")
            continue

        if isinstance(result.message, Incomplete):
            stats["incomplete"] += 1
            continue

        stats[type(result.message).__name__] += 1
        if args.json:
            print(to_json(result, sentence))
        else:
            if result.tag_block is not None:
                print(f"Tag block: {result.tag_block}")
            print(result.message)

    print("\nDecoding statistics:")
    for key, value in sorted(stats.items()):
        print(f"  {key}: {value}")
    print(f"  still pending: {nmea.pending_fragment_count}")

    return 0


if __name__ == "__main__":
    exit(main())
