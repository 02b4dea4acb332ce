"""Fireworks Relay: real-time firework broadcast server.

Participants launch short-lived bursts (position, size, shape, color) over a
WebSocket. The server validates each one, keeps a bounded replay of the most
recent bursts for late joiners, and fans every accepted burst out to all
connected participants.
"""

__version__ = "0.1.0"
