"""Least-squares backends."""

from pydensela.lsq.backends.cpu import CPUQRLeastSquaresBackend, CPUSVDLeastSquaresBackend

__all__ = ["CPUQRLeastSquaresBackend", "CPUSVDLeastSquaresBackend"]
