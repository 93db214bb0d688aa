"""
Core infrastructure: database, transactions, cache and exceptions.
"""
