"""HTTP layer: Starlette app factory, routes, and uvicorn runner."""
