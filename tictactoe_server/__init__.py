"""Two-player tic-tac-toe game server."""
