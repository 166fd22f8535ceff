"""HTTP boundary: routers, dependencies and error translation."""
