"""
Catalog crawl mechanics: rate policy, fetching, extraction and the crawl loop.
"""
