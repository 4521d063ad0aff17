"""Generative-backend collaborators: device classification and fleet summaries.

Both degrade to fixed fallbacks; callers never see backend failures.
"""
