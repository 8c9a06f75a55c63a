"""
Societies - Game server for Secret Societies

A server-authoritative state machine for a 2-4 player secret-identity
board game. The server provides:
- Lobby creation and joining
- Validated, atomic turn actions
- Shared game state pushed to every client
- A persistent win leaderboard
"""

__version__ = "0.1.0"
