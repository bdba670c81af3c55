"""Concurrency backends: threaded chaos-game streaming and sharded work pools."""
