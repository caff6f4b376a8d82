"""crosstrain — header-plus-body documents and layered configuration."""

__version__ = "0.1.0"
