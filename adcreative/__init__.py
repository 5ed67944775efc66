"""
AdCreative - Campaign and creative management with AI-assisted generation

Domain model, AI orchestration, creative wizard and an in-memory campaign
store for Facebook and TikTok advertising campaigns.
"""

__version__ = "0.1.0"
__author__ = "AdCreative Team"
