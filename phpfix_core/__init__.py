"""
phpfix core - token-level fixers for PHP source code.
"""
