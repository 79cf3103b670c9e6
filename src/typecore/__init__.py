"""
typecore: local-first data core of a typing-practice client.

Holds a user's typing-test history, personal bests, leaderboard memory and
experience points on the local device and keeps them consistent as results
arrive.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
