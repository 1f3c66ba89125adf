"""Recognizer implementations turning raw files into documents."""
