"""Eigenproblem backends."""

from pydensela.eigen.backends.cpu import CPUEigenBackend

__all__ = ["CPUEigenBackend"]
