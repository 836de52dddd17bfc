"""
Object storage systems.
"""
