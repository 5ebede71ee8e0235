"""Refresh requirements.txt dependencies, force-reinstalling git-sourced packages."""

__version__ = "0.3.0"
