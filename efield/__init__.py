"""
efield: electrostatic field plots for sets of point charges.
"""

__version__ = '0.1.0'
