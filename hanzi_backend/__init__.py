"""
Hanzi knowledge base backend package.
Builds the character database from the dictionary source and reference table
and answers character and decomposition lookups against it.
"""

__version__ = '1.0.0'
