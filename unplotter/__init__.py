"""
UnPlotter - extract calibrated data from vector plots in PDF files.
"""

__version__ = "0.1.0"
