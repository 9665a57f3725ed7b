"""
phpfix server - HTTP front end for the fixers.
"""
