"""
Fatturazione API - motore fiscale per fatture elettroniche italiane
"""
__version__ = "1.0.0"
