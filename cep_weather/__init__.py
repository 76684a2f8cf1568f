"""
CEP weather service: postal code to temperature orchestration.
"""

__version__ = "1.0.0"
