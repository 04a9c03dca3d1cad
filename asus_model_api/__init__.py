"""HTTP API serving specs, imagery and marketing copy for ASUS laptop models."""

__version__ = "1.0.0"
