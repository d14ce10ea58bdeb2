"""
API Routes
"""
from wopi_proof.api.routes import proof

__all__ = ["proof"]
