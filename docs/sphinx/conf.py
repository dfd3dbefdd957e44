# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for the slmodel API documentation."""

import pathlib
import sys

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[2] / "src"))

project = "slmodel"
author = "slmodel Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc", "sphinx.ext.napoleon"]
autodoc_member_order = "bysource"
napoleon_google_docstring = True

html_theme = "alabaster"
