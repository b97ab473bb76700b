"""
CLOPE: Clustering of Transactional Data

Groups categorical, set-valued records by maximizing a global profit
that trades cluster cohesion against the number of distinct items.
"""

__version__ = "0.1.0"
__author__ = "CLOPE Team"
