"""orgsift - Extract headlines from Org files and reflow hard-wrapped text."""

__version__ = "0.1.0"
