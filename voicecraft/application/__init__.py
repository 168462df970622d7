"""
Application layer.

Service orchestrators and the jobs page context.
"""
