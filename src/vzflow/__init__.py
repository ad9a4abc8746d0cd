"""vzflow: perception-gated automation of a VM setup flow."""

__version__ = "0.1.0"
