"""Servicios del core (lógica con estado de control, sin I/O directo)."""
