"""
projectstore - metadata persistence for project service alerts and
on-demand feature groups.
"""

__version__ = "0.1.0"
