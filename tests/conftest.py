"""
Shared pytest configuration for the SoundMap test suite.
"""

import matplotlib

matplotlib.use("Agg")  # Non-interactive backend
