"""
Adapters package for verification bounded context.
"""
