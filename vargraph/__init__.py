"""
holds submodules related to building and querying sequence variation reference graphs
"""
__version__ = '0.1.0'
