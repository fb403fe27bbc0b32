"""Local scoring of a submitted answer sheet."""

from .scorer import score

__all__ = ["score"]
