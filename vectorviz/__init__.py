"""
Vector Transformation Playground.

Core of the vector transform page: parse and validate the text inputs,
apply the 3×3 matrix, and derive the scene geometry the plotly view draws.
"""

__version__ = "0.1.0"
