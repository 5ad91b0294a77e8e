"""Realtime infrastructure (Socket.IO relay, presence, publishers)."""
