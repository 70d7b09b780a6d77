# listing_rank/cli.py
import argparse
from pathlib import Path

from . import config
from .collect import collect_listings_from_file
from .config import RankSettings
from .rank import rank_listings


def main(argv=None):
    ap = argparse.ArgumentParser(description="Rank listings from a saved search-results page")
    ap.add_argument("page", type=Path, help="Saved HTML of a search-results page")
    ap.add_argument("--origin", default=config.ORIGIN,
                    help="Origin used to resolve relative listing links")
    ap.add_argument("--debug", action=argparse.BooleanOptionalAction, default=config.DEBUG,
                    help="Also log the full ranked table")
    args = ap.parse_args(argv)

    # invalid origin raises here, before any page is read
    settings = RankSettings(debug=args.debug, origin=args.origin)
    listings = collect_listings_from_file(args.page)
    result = rank_listings(listings, settings)

    if result.best is None:
        print("Best ranked: <none>")
        return 1

    best = result.best
    print(f"Best ranked: price={best.price} rating={best.rating} "
          f"delivery={best.delivery_code} score={best.score:.4f}")
    print(f"URL: {best.url}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
