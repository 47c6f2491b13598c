"""Web adapter — FastAPI method channel."""
