"""
HTTP layer: middleware and versioned routers.
"""
