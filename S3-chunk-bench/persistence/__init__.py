"""
Output sink and timing record persistence.
"""
