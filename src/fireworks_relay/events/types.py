"""Message type constants for the WebSocket channel.

Learn: Centralizing message kinds as constants prevents typos and makes it
easy to discover everything that travels over the wire.
"""

# ─── Client ↔ server ─────────────────────────────────────

LAUNCH = "launch"  # one firework, both directions

# ─── Server → client ─────────────────────────────────────

HISTORY = "history"  # replay sent once, right after connect
PONG = "pong"

# ─── Client → server ─────────────────────────────────────

PING = "ping"
