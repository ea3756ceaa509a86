"""HTTP API for MyGram."""
