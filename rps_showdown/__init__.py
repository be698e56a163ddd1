"""
RPS Showdown Application Package

This package contains the FastAPI service, the round state machine, score
persistence and the presentation helpers for the single-screen
Rock-Paper-Scissors game.
"""

__version__ = "1.0.0"
