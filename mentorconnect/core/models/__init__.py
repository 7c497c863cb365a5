"""API-facing models shared by the server layer."""
