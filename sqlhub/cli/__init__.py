"""
Command-line interface for sqlhub.
"""
