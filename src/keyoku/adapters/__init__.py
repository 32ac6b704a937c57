"""Adaptadores de I/O: transporte httpx, dispatcher, clasificador y recursos."""
