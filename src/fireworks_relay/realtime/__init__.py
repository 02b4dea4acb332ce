"""Real-time transport: WebSocket endpoint in front of the relay.

Learn: Each connection runs two tasks:
1. Writer: drains the session's outbox onto the socket
2. Reader: receives frames and hands launches to the relay

The relay never touches the socket, so it can be tested without one.
"""
