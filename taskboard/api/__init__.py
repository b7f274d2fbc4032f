"""HTTP layer: FastAPI app factory, routers and exception handlers."""
