"""Countdown - client for a remote task list with live deadline countdowns."""
