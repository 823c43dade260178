# sampling/__init__.py
from sampling.pdf import PDF, CosinePDF, SurfacePDF, MixturePDF

__all__ = ["PDF", "CosinePDF", "SurfacePDF", "MixturePDF"]
