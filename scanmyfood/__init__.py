"""scanmyfood backend: AI food scanning and user onboarding."""

__version__ = "0.1.0"
