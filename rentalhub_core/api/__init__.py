"""HTTP API helpers shared by RentalHub blueprints."""

from .validation import validate_request

__all__ = ["validate_request"]
