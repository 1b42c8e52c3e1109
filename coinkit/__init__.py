"""Bitcoin transaction building, serialization, sighash and address encoding."""

__version__ = "0.1.0"