"""RentalHub Core: authentication back end for the RentalHub rental catalog."""

__version__ = "0.1.0"
