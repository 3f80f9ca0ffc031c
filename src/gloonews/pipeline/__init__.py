from gloonews.pipeline.base import Verifier
from gloonews.pipeline.verification import Verification, VerificationPipeline

__all__ = [
    "Verification",
    "VerificationPipeline",
    "Verifier",
]
