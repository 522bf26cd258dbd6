"""
OpenData Gateway - resilient tool gateway for the UK Parliament APIs.
"""

__version__ = "1.0.0"
