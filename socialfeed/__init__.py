"""
SocialFeed API: posts, likes, comments and token-based accounts.
"""
__version__ = "1.0.0"
