"""
Utility helpers shared by the command line tools.
"""
