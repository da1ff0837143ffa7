"""Plugin host runtime: loads server plugins into a FastAPI app."""
