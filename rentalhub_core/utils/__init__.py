"""Utility functions for RentalHub Core.

Import convention: use module-level imports for clarity.

    from rentalhub_core.utils import isodatetime, uid
    timestamp = isodatetime.now()
    user_id = uid.generate_uuid()
"""

from . import isodatetime, uid

__all__ = ["isodatetime", "uid"]
