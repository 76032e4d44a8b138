"""Scheduled weather fetch, classification and automation dispatch."""
