"""FastAPI adapter exposing the QR code persistence API."""
