"""
Translation Telephone

Several language models pass the same phrase through a chain of
translations in parallel; the model whose final text stays closest to the
original phrase wins.
"""

__version__ = "1.0.0"
__author__ = "Translation Telephone Team"
