"""kirjanpito - bookkeeping ledger from receipt PDF filenames."""

__version__ = "0.3.0"
