"""
Range tracking and the chunked download loop.
"""
