"""Questlog: campaign journal and entity tracker backend."""
