from gloonews.verify.cache import VerificationCache

__all__ = [
    "VerificationCache",
]
