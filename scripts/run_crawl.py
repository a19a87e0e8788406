"""
Run the catalog crawler from a source checkout.
"""

from __future__ import annotations

from nointro_crawler.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
