"""E-ink framebuffer pixel access, drawing, refresh control and button event decoding."""

__version__ = "0.7.0"