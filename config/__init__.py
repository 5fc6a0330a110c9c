"""
config: environment-driven application settings.
"""
