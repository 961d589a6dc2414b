"""HTTP API for the field project credential service."""
