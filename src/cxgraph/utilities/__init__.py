"""
cxgraph.utilities - Shared helpers
"""
