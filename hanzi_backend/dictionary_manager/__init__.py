"""
Import pipeline, decomposition resolver and database helpers for the Hanzi knowledge base.
"""
