"""FMI heating degree-day viewer.

Fetches the yearly heating degree-day CSV published by the Finnish
Meteorological Institute and resolves one location/month value from it.
"""

__version__ = "0.1.0"
