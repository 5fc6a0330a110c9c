"""
database: ORM models and async session plumbing.
"""
