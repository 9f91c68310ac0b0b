"""waskit - create modern web projects with minimal setup."""

__version__ = "0.1.0"
