# solardevis/api/__init__.py

from solardevis.api import audits
from solardevis.api import quotes
from solardevis.api import analysis
from solardevis.api import solar

__all__ = [
    "audits",
    "quotes",
    "analysis",
    "solar",
]
