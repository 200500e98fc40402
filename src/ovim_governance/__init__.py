"""OVIM resource governance and admission control."""

from .__version__ import __version__

__all__ = ["__version__"]
