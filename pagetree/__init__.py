"""pagetree: idempotent create-or-update of documentation page trees."""

__version__ = "0.1.0"
