"""
Allow running the package directly: python -m fractal_explorer
"""
from .app import run

run()
