"""Connection tester for MELSEC (SLMP) and LS (XGT) PLCs over TCP."""

__version__ = "0.1.0"