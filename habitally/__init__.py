"""
Habitally - трекер привычек, целей, распорядков и рефлексии
"""

__version__ = "1.0.0"
