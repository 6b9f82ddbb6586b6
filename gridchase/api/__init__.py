"""HTTP surface: engine host thread, FastAPI app and routes."""
