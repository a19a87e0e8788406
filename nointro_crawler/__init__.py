"""
nointro_crawler package marker.
"""
