"""Schema-driven record console for generic REST data gateways."""

__version__ = "0.1.0"
