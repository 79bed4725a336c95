"""
Source processors for the import pipeline.
"""
