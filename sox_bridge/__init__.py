"""Sox Bridge - drive the sox command-line sound editor as a subprocess."""

__version__ = "0.1.0"
