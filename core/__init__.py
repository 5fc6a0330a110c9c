"""
core: domain error hierarchy shared by every layer.
"""
