"""
wopi-proof

Signs outbound WOPI requests with X-WOPI-Proof headers and publishes the
matching proof key for the discovery document.
"""

__version__ = "0.1.0"
