# Sphinx configuration for the SoundMap API reference.

import os
import sys

sys.path.insert(0, os.path.abspath("../.."))

project = "SoundMap"
copyright = "2026, SoundMap Contributors"
author = "SoundMap Contributors"
release = "1.0.0"

# Google-style docstrings
extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
]
napoleon_google_docstring = True
napoleon_numpy_docstring = False

autodoc_member_order = "bysource"

html_theme = "sphinx_rtd_theme"
