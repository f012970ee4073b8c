"""
geoexplorer - terminal explorer for geographic and economic reference data.
"""

__version__ = "0.1.0"
