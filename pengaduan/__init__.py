"""Pengaduan: citizen complaint reporting API."""

__version__ = "1.0.0"
